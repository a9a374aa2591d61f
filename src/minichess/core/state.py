"""GameState snapshots and the move transition between them."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from minichess.core.attacks import is_king_in_check
from minichess.core.board import Board
from minichess.core.enums import BoardSize, BoardTheme, Color, GameVariant, PieceType
from minichess.core.move_generator import calculate_valid_moves
from minichess.core.rules import has_legal_move
from minichess.core.types import Square


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of a game.

    Transitions return a new instance; the board of an existing snapshot is
    never written to, so older snapshots stay valid for undo. The board takes
    part in equality but not in the hash.
    """

    board: Board = field(hash=False)
    current_turn: Color = Color.WHITE
    selected_piece: Square | None = None
    valid_moves: tuple[Square, ...] = ()
    is_check: bool = False
    is_checkmate: bool = False
    is_stalemate: bool = False
    computer_level: int = 2
    player_color: Color = Color.WHITE
    board_theme: BoardTheme = BoardTheme.GREEN
    board_size: BoardSize = BoardSize.SIX_BY_SIX
    game_variant: GameVariant = GameVariant.PAWNS

    # ── Construction ─────────────────────────────────────────────────────

    @classmethod
    def initial(
        cls,
        board_size: BoardSize | str = BoardSize.SIX_BY_SIX,
        game_variant: GameVariant | str = GameVariant.PAWNS,
        *,
        player_color: Color = Color.WHITE,
        computer_level: int = 2,
        board_theme: BoardTheme = BoardTheme.GREEN,
    ) -> GameState:
        """Fresh game with white to move."""
        size = BoardSize(board_size)
        variant = (
            game_variant
            if isinstance(game_variant, GameVariant)
            else GameVariant.parse(game_variant)
        )
        return cls(
            board=Board.initial(size, variant),
            computer_level=computer_level,
            player_color=player_color,
            board_theme=board_theme,
            board_size=size,
            game_variant=variant,
        )

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def is_game_over(self) -> bool:
        return self.is_checkmate or self.is_stalemate

    @property
    def is_computer_turn(self) -> bool:
        return self.current_turn != self.player_color

    # ── Transitions ──────────────────────────────────────────────────────

    def select(self, square: Square | None) -> GameState:
        """Copy with *square* selected and its legal targets listed.

        Selecting ``None``, an empty square, or an opponent's piece clears
        the selection.
        """
        if square is None:
            return replace(self, selected_piece=None, valid_moves=())
        square = Square(*square)
        piece = self.board[square]
        if piece is None or piece.color != self.current_turn:
            return replace(self, selected_piece=None, valid_moves=())
        return replace(
            self,
            selected_piece=square,
            valid_moves=tuple(calculate_valid_moves(square, self)),
        )

    def with_status(self) -> GameState:
        """Copy with check, checkmate and stalemate flags recomputed."""
        in_check = is_king_in_check(self)
        can_move = has_legal_move(self)
        return replace(
            self,
            is_check=in_check,
            is_checkmate=in_check and not can_move,
            is_stalemate=not in_check and not can_move,
        )


def make_move(
    state: GameState,
    from_sq: Square,
    to_sq: Square,
    promotion: PieceType | None = None,
) -> GameState:
    """Play *from_sq* → *to_sq* and return the resulting state.

    Castling and promotion are inferred from the board: a king moving two
    columns castles, a pawn reaching the far rank promotes to *promotion*
    (a queen by default). The move itself is not validated; callers pick it
    from :func:`calculate_valid_moves`.
    """
    return apply_move(state, from_sq, to_sq, promotion).with_status()


def apply_move(
    state: GameState,
    from_sq: Square,
    to_sq: Square,
    promotion: PieceType | None = None,
) -> GameState:
    """Like :func:`make_move` but with the status flags left cleared.

    The search plays thousands of these and detects terminal positions from
    an empty move list, so it skips the legal-move scan of
    :meth:`GameState.with_status`.
    """
    board = state.board.with_move(Square(*from_sq), Square(*to_sq), promotion)
    return replace(
        state,
        board=board,
        current_turn=state.current_turn.opposite,
        selected_piece=None,
        valid_moves=(),
        is_check=False,
        is_checkmate=False,
        is_stalemate=False,
    )
