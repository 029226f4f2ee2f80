from gobang.game.types import Difficulty, GameMode, GameStatus, Player, Point


def test_player_other():
    assert Player.BLACK.other is Player.WHITE
    assert Player.WHITE.other is Player.BLACK


def test_player_str():
    assert str(Player.BLACK) == "Black"
    assert str(Player.WHITE) == "White"


def test_point_is_namedtuple():
    p = Point(3, 5)
    assert p.x == 3
    assert p.y == 5
    assert p == Point(3, 5)


def test_win_status_for_player():
    assert GameStatus.win_for(Player.BLACK) is GameStatus.BLACK_WIN
    assert GameStatus.win_for(Player.WHITE) is GameStatus.WHITE_WIN


def test_terminal_statuses():
    assert not GameStatus.IDLE.is_terminal
    assert not GameStatus.PLAYING.is_terminal
    assert GameStatus.BLACK_WIN.is_terminal
    assert GameStatus.WHITE_WIN.is_terminal
    assert GameStatus.DRAW.is_terminal


def test_enum_values_match_wire_names():
    assert GameMode("pve") is GameMode.PVE
    assert Difficulty("hard") is Difficulty.HARD
    assert GameStatus("black_win") is GameStatus.BLACK_WIN
