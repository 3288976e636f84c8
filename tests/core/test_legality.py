"""Tests for attack detection, castling conditions and the legality gate."""

import pytest

from gambit.core.enums import Color, PieceKind
from gambit.core.legality import LegalityChecker
from gambit.core.move import Move
from gambit.core.move_generator import MoveGenerator
from gambit.core.notation import position_from_fen
from gambit.core.piece import Piece
from gambit.core.position import Position
from gambit.core.types import (
    A1, A3, A6, A8, B3, C1, D1, D3, D5, D6, E1, E2, E3, E4, E5, F3, G1, H5,
    parse_square,
)

CASTLES = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"


def _checker(fen: str) -> LegalityChecker:
    return LegalityChecker(position_from_fen(fen))


class TestPathClear:
    def test_blocked_file(self) -> None:
        checker = LegalityChecker(Position())
        assert not checker.path_clear(A1, A8)

    def test_open_file(self) -> None:
        checker = LegalityChecker(Position())
        assert checker.path_clear(A3, A6)

    def test_blocked_diagonal(self) -> None:
        checker = LegalityChecker(Position())
        assert not checker.path_clear(D1, H5)

    def test_adjacent_squares(self) -> None:
        checker = LegalityChecker(Position())
        assert checker.path_clear(E1, E2)

    def test_unaligned_raises(self) -> None:
        checker = LegalityChecker(Position())
        with pytest.raises(ValueError):
            checker.path_clear(A1, B3)


class TestPawnPredicates:
    LONE_PAWN = "4k3/8/8/8/8/8/4P3/4K3 w - - 0 1"

    def test_pawn_attacks_diagonals_only(self) -> None:
        checker = _checker(self.LONE_PAWN)
        assert checker.piece_attacks(E2, D3)
        assert checker.piece_attacks(E2, F3)
        assert not checker.piece_attacks(E2, E3)
        assert not checker.piece_attacks(E2, E4)

    def test_pawn_moves_forward_only_to_empty(self) -> None:
        checker = _checker(self.LONE_PAWN)
        assert checker.pawn_can_move(E2, E3)
        assert checker.pawn_can_move(E2, E4)
        assert not checker.pawn_can_move(E2, D3)

    def test_double_push_needs_both_squares_empty(self) -> None:
        checker = _checker("4k3/8/8/8/8/4n3/4P3/4K3 w - - 0 1")
        assert not checker.pawn_can_move(E2, E3)
        assert not checker.pawn_can_move(E2, E4)

    def test_king_on_push_square_is_not_in_check(self) -> None:
        checker = _checker("8/8/8/8/8/4k3/4P3/4K3 b - - 0 1")
        assert not checker.king_in_check(Color.BLACK)

    def test_king_on_pawn_diagonal_is_in_check(self) -> None:
        checker = _checker("8/8/8/8/8/3k4/4P3/4K3 b - - 0 1")
        assert checker.king_in_check(Color.BLACK)

    def test_black_pawn_attacks_downward(self) -> None:
        checker = _checker("4k3/8/8/8/3p4/8/8/4K3 w - - 0 1")
        assert checker.square_attacked(E3, Color.BLACK)
        assert not checker.square_attacked(parse_square("d3"), Color.BLACK)


class TestAttacks:
    def test_knight_jumps_over_pieces(self) -> None:
        checker = LegalityChecker(Position())
        assert checker.piece_attacks(parse_square("g1"), F3)
        assert checker.square_attacked(F3, Color.WHITE)

    def test_sliders_are_blocked(self) -> None:
        checker = LegalityChecker(Position())
        assert not checker.piece_attacks(D1, H5)
        assert not checker.square_attacked(H5, Color.WHITE)

    def test_empty_square_attacks_nothing(self) -> None:
        checker = LegalityChecker(Position())
        assert not checker.piece_attacks(E4, E5)

    def test_rook_gives_check(self) -> None:
        checker = _checker("4k3/4r3/8/8/8/8/8/4K3 w - - 0 1")
        assert checker.king_in_check(Color.WHITE)
        assert not checker.king_in_check(Color.BLACK)


class TestCastling:
    def test_allowed_when_all_conditions_hold(self) -> None:
        checker = _checker(CASTLES)
        assert checker.can_castle(Color.WHITE, kingside=True)
        assert checker.can_castle(Color.WHITE, kingside=False)
        assert checker.can_castle(Color.BLACK, kingside=True)
        assert checker.can_castle(Color.BLACK, kingside=False)

    def test_path_blocked(self) -> None:
        checker = _checker("r3k2r/8/8/8/8/8/8/R3K1NR w KQkq - 0 1")
        assert not checker.can_castle(Color.WHITE, kingside=True)
        assert checker.can_castle(Color.WHITE, kingside=False)

    def test_queenside_knight_square_must_be_empty(self) -> None:
        checker = _checker("r3k2r/8/8/8/8/8/8/RN2K2R w KQkq - 0 1")
        assert not checker.can_castle(Color.WHITE, kingside=False)

    def test_king_in_check(self) -> None:
        checker = _checker("4k3/4r3/8/8/8/8/8/R3K2R w KQ - 0 1")
        assert not checker.can_castle(Color.WHITE, kingside=True)
        assert not checker.can_castle(Color.WHITE, kingside=False)

    def test_transit_square_attacked(self) -> None:
        checker = _checker("4kr2/8/8/8/8/8/8/R3K2R w KQ - 0 1")
        assert not checker.can_castle(Color.WHITE, kingside=True)
        assert checker.can_castle(Color.WHITE, kingside=False)

    def test_landing_square_attacked(self) -> None:
        checker = _checker("4k1r1/8/8/8/8/8/8/R3K2R w KQ - 0 1")
        assert not checker.can_castle(Color.WHITE, kingside=True)

    def test_queenside_transit_attacked(self) -> None:
        checker = _checker("3rk3/8/8/8/8/8/8/R3K2R w KQ - 0 1")
        assert not checker.can_castle(Color.WHITE, kingside=False)
        assert checker.can_castle(Color.WHITE, kingside=True)

    def test_attacked_b_file_square_does_not_matter(self) -> None:
        checker = _checker("1r2k3/8/8/8/8/8/8/R3K2R w KQ - 0 1")
        assert checker.can_castle(Color.WHITE, kingside=False)

    def test_flag_already_used(self) -> None:
        checker = _checker("r3k2r/8/8/8/8/8/8/R3K2R w Kkq - 0 1")
        assert not checker.can_castle(Color.WHITE, kingside=False)
        assert checker.can_castle(Color.WHITE, kingside=True)

    def test_rook_moved_away_and_back(self) -> None:
        pos = position_from_fen(CASTLES)
        for from_sq, to_sq in (("h1", "h2"), ("a8", "a7"), ("h2", "h1"), ("a7", "a8")):
            move = LegalityChecker(pos).build_move(parse_square(from_sq), parse_square(to_sq))
            assert move is not None
            pos.make_move(move)
        checker = LegalityChecker(pos)
        assert not checker.can_castle(Color.WHITE, kingside=True)
        assert checker.can_castle(Color.WHITE, kingside=False)
        assert not checker.can_castle(Color.BLACK, kingside=False)

    def test_king_moved_away_and_back(self) -> None:
        pos = position_from_fen(CASTLES)
        for from_sq, to_sq in (("e1", "e2"), ("a8", "a7"), ("e2", "e1"), ("a7", "a8")):
            move = LegalityChecker(pos).build_move(parse_square(from_sq), parse_square(to_sq))
            assert move is not None
            pos.make_move(move)
        checker = LegalityChecker(pos)
        assert not checker.can_castle(Color.WHITE, kingside=True)
        assert not checker.can_castle(Color.WHITE, kingside=False)
        assert not checker.is_legal_move(E1, G1)
        assert not checker.is_legal_move(E1, C1)
        assert checker.can_castle(Color.BLACK, kingside=True)

    def test_rook_missing(self) -> None:
        checker = _checker("4k3/8/8/8/8/8/8/R3K3 w KQ - 0 1")
        assert not checker.can_castle(Color.WHITE, kingside=True)

    def test_castle_is_routed_through_legality_gate(self) -> None:
        checker = _checker(CASTLES)
        move = checker.build_move(E1, G1)
        assert move == Move(E1, G1, is_castling=True)
        assert checker.is_legal_move(E1, C1)

        blocked = _checker("4kr2/8/8/8/8/8/8/R3K2R w KQ - 0 1")
        assert not blocked.is_legal_move(E1, G1)


class TestLegalityGate:
    def test_rejects_out_of_bounds(self) -> None:
        checker = LegalityChecker(Position())
        assert not checker.is_legal_move(parse_square("e2"), 64)
        assert not checker.is_legal_move(-1, E4)

    def test_rejects_empty_source(self) -> None:
        checker = LegalityChecker(Position())
        assert not checker.is_legal_move(E4, E5)

    def test_rejects_opponent_piece(self) -> None:
        checker = LegalityChecker(Position())
        assert not checker.is_legal_move(parse_square("e7"), parse_square("e5"))

    def test_rejects_own_piece_on_destination(self) -> None:
        checker = LegalityChecker(Position())
        assert not checker.is_legal_move(D1, E2)

    def test_pinned_piece_cannot_leave_line(self) -> None:
        checker = _checker("4k3/4r3/8/8/8/8/4B3/4K3 w - - 0 1")
        assert not checker.is_legal_move(E2, D3)
        assert not checker.is_legal_move(E2, F3)

    def test_must_answer_check(self) -> None:
        checker = _checker("4k3/4r3/8/8/8/8/8/R3K3 w - - 0 1")
        assert not checker.is_legal_move(A1, A3)
        assert not checker.is_legal_move(A1, parse_square("a7"))
        assert checker.is_legal_move(E1, D1)

    def test_live_position_untouched(self) -> None:
        pos = position_from_fen("4k3/4r3/8/8/8/8/4B3/4K3 w - - 0 1")
        before = pos.copy()
        LegalityChecker(pos).is_legal_move(E2, D3)
        assert pos == before
        assert pos.ply_depth == 0


class TestEnPassantLegality:
    def test_capture_allowed_on_next_ply(self) -> None:
        checker = _checker("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
        move = checker.build_move(E5, D6)
        assert move is not None
        assert move.is_en_passant
        assert move.captured == Piece(Color.BLACK, PieceKind.PAWN)

    def test_capture_not_allowed_without_file(self) -> None:
        checker = _checker("4k3/8/8/3pP3/8/8/8/4K3 w - - 0 1")
        assert not checker.is_legal_move(E5, D6)

    def test_capture_exposing_king_on_rank_is_illegal(self) -> None:
        checker = _checker("8/8/8/K2pP2r/8/8/8/4k3 w - d6 0 1")
        assert not checker.is_legal_move(E5, D6)
        assert checker.is_legal_move(E5, parse_square("e6"))

    def test_generated_after_double_push(self) -> None:
        pos = position_from_fen("4k3/3p4/8/4P3/8/8/8/4K3 b - - 0 1")
        push = LegalityChecker(pos).build_move(parse_square("d7"), D5)
        assert push is not None
        pos.make_move(push)
        moves = MoveGenerator(pos).generate_moves()
        assert Move(E5, D6, Piece(Color.BLACK, PieceKind.PAWN), is_en_passant=True) in moves


class TestNoSelfCheck:
    @pytest.mark.parametrize(
        "fen",
        [
            "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
            "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1",
            "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 w kq - 0 1",
            "8/8/8/K2pP2r/8/8/8/4k3 w - d6 0 1",
        ],
    )
    def test_generated_moves_never_leave_king_in_check(self, fen: str) -> None:
        pos = position_from_fen(fen)
        mover = pos.side_to_move
        for move in MoveGenerator(pos).generate_moves():
            record = pos.make_move(move)
            assert not LegalityChecker(pos).king_in_check(mover), f"{move} leaves king in check"
            pos.unmake_move(move, record)

