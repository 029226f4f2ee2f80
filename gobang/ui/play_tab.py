"""Play tab: PvP or Human vs AI with interactive SVG board, save and load."""

from __future__ import annotations

import time as _time
from typing import Iterator

import gradio as gr

from gobang.config import SAVE_DIR
from gobang.game.board import format_point, parse_coordinate
from gobang.game.record import GameRecordStore
from gobang.game.session import GameSession, ManualScheduler
from gobang.game.types import Difficulty, GameMode, GameStatus, Player
from gobang.ui.board_component import render_board_svg

MODE_CHOICES: dict[str, GameMode] = {
    "Player vs Player": GameMode.PVP,
    "Player vs AI": GameMode.PVE,
}
DIFFICULTY_CHOICES: dict[str, Difficulty] = {
    "Easy": Difficulty.EASY,
    "Medium": Difficulty.MEDIUM,
    "Hard": Difficulty.HARD,
}


def _toast(level: str, message: str) -> None:
    if level == "info":
        gr.Info(message)
    else:
        gr.Warning(message)


def make_session() -> GameSession:
    """A session whose AI replies are run by the tab callbacks themselves."""
    session = GameSession(
        store=GameRecordStore(SAVE_DIR),
        notify=_toast,
        scheduler=ManualScheduler(),
    )
    session.new_game(GameMode.PVE, Difficulty.MEDIUM)
    return session


def game_over_banner(session: GameSession) -> str:
    """Short text for the SVG overlay banner. Empty if game is not over."""
    status = session.status
    if not status.is_terminal:
        return ""
    if status is GameStatus.DRAW:
        return "Draw!"
    winner = Player.BLACK if status is GameStatus.BLACK_WIN else Player.WHITE
    if session.ai_player is None:
        return f"{winner} wins!"
    return "AI wins!" if winner is session.ai_player else "You win!"


def status_text(session: GameSession) -> str:
    status = session.status
    if status is GameStatus.IDLE:
        return "Press New Game to start."
    if status.is_terminal:
        banner = game_over_banner(session)
        if status is GameStatus.DRAW:
            return "Game over — Draw! The board is full."
        return f"Game over — {banner} (5 in a row)"
    player = session.state.current_player
    if session.busy or player is session.ai_player:
        return f"AI is thinking... ({player})"
    return f"{player} to move"


def move_history_table(session: GameSession) -> list[list[str]]:
    return [
        [str(move.index + 1), str(move.player), format_point(move.point)]
        for move in session.state.moves
    ]


def _outputs(session: GameSession):
    snapshot = session.get_snapshot()
    clickable = not session.busy and session.state.current_player is not session.ai_player
    board_html = render_board_svg(
        snapshot,
        clickable=clickable,
        game_over_message=game_over_banner(session),
    )
    return board_html, status_text(session), move_history_table(session), session


def _run_ai_replies(session: GameSession) -> Iterator:
    """Play queued AI replies, pausing first so the last stone shows."""
    scheduler = session.scheduler
    if not isinstance(scheduler, ManualScheduler):
        return
    for delay, callback in scheduler.drain():
        _time.sleep(delay)
        callback()
        yield _outputs(session)


def _apply_human_move(coord_text: str, session: GameSession):
    """Process a human move, then let the AI respond."""
    point = parse_coordinate(coord_text or "")
    if point is None:
        gr.Warning(f"Invalid coordinate: '{coord_text}'. Use format like H8.")
        yield _outputs(session) + ("",)
        return

    outcome = session.apply_move(point.x, point.y)
    if not outcome.accepted:
        gr.Warning(outcome.reason or "Move rejected")
    yield _outputs(session) + ("",)

    for update in _run_ai_replies(session):
        yield update + ("",)


def _new_game(mode_choice: str, difficulty_choice: str, session: GameSession):
    mode = MODE_CHOICES.get(mode_choice, GameMode.PVP)
    difficulty = DIFFICULTY_CHOICES.get(difficulty_choice, Difficulty.MEDIUM)
    session.new_game(mode, difficulty if mode is GameMode.PVE else None)
    return _outputs(session)


def _undo_move(session: GameSession):
    """Undo the last move; against the AI, undo its reply and your move."""
    moves = session.state.moves
    pair = session.ai_player is not None and bool(moves) and moves[-1].player is session.ai_player
    outcome = session.undo(2 if pair else 1)
    if not outcome.accepted:
        gr.Warning(outcome.reason or "Cannot undo")
    yield _outputs(session)
    yield from _run_ai_replies(session)


def _saved_game_choices(session: GameSession) -> list[tuple[str, str]]:
    return [
        (f"{s.name} — {s.mode}{'/' + s.difficulty if s.difficulty else ''}, "
         f"{s.total_moves} moves, {s.status} ({s.updated_at[:16]})", s.id)
        for s in session.list_games()
    ]


def _refresh_saved(session: GameSession):
    choices = _saved_game_choices(session)
    return gr.update(choices=choices, value=choices[0][1] if choices else None)


def _save_game(name: str, session: GameSession):
    name = (name or "").strip()
    if not name:
        gr.Warning("Enter a name for the saved game.")
        return gr.update()
    if not session.state.moves:
        gr.Warning("No moves to save.")
        return gr.update()
    session.save_game(name)
    return _refresh_saved(session)


def _load_saved(game_id: str, session: GameSession):
    if not game_id:
        gr.Warning("Select a saved game.")
        yield _outputs(session)
        return
    session.load_game(game_id)
    yield _outputs(session)
    yield from _run_ai_replies(session)


def _delete_saved(game_id: str, session: GameSession):
    if game_id and session.delete_game(game_id):
        gr.Info("Saved game deleted")
    return _refresh_saved(session)


def build_play_tab() -> None:
    """Construct the Play tab UI inside a gr.Blocks context."""

    initial = make_session()
    session_state = gr.State(initial)

    with gr.Row():
        # Left: board
        with gr.Column(scale=3):
            board_html = gr.HTML(value=_outputs(initial)[0], label="Board")
        # Right: controls
        with gr.Column(scale=1):
            status_box = gr.Textbox(
                value=status_text(initial),
                label="Status",
                interactive=False,
                lines=2,
            )

            gr.Markdown("### New Game")
            mode_choice = gr.Radio(
                choices=list(MODE_CHOICES.keys()),
                value="Player vs AI",
                label="Mode",
            )
            difficulty_choice = gr.Radio(
                choices=list(DIFFICULTY_CHOICES.keys()),
                value="Medium",
                label="AI difficulty",
            )
            new_game_btn = gr.Button("New Game", variant="primary")
            undo_btn = gr.Button("Undo")

            gr.Markdown("### Enter Move")
            coord_input = gr.Textbox(
                label="Coordinate (e.g. H8)",
                placeholder="H8",
                elem_id="coord-input",
                lines=1,
            )
            coord_submit = gr.Button("Submit Move", elem_id="coord-submit")

            gr.Markdown("### Saved Games")
            save_name = gr.Textbox(label="Name", placeholder="My game", lines=1)
            save_btn = gr.Button("Save Game")
            saved_games = gr.Dropdown(
                choices=_saved_game_choices(initial),
                label="Saved games",
            )
            with gr.Row():
                refresh_btn = gr.Button("Refresh")
                load_btn = gr.Button("Load", variant="primary")
                delete_btn = gr.Button("Delete", variant="stop")

            gr.Markdown("### Move History")
            move_table = gr.Dataframe(
                headers=["#", "Player", "Move"],
                datatype=["number", "str", "str"],
                interactive=False,
                column_count=3,
            )

    # Outputs shared by most callbacks
    board_outputs = [board_html, status_box, move_table, session_state]

    coord_submit.click(
        fn=_apply_human_move,
        inputs=[coord_input, session_state],
        outputs=board_outputs + [coord_input],
    )
    new_game_btn.click(
        fn=_new_game,
        inputs=[mode_choice, difficulty_choice, session_state],
        outputs=board_outputs,
    )
    undo_btn.click(fn=_undo_move, inputs=[session_state], outputs=board_outputs)
    save_btn.click(fn=_save_game, inputs=[save_name, session_state], outputs=[saved_games])
    refresh_btn.click(fn=_refresh_saved, inputs=[session_state], outputs=[saved_games])
    load_btn.click(fn=_load_saved, inputs=[saved_games, session_state], outputs=board_outputs)
    delete_btn.click(fn=_delete_saved, inputs=[saved_games, session_state], outputs=[saved_games])
