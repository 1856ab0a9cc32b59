import unittest

from ludo_engine.board import Board
from ludo_engine.config import Config, config
from ludo_engine.exceptions import BoardStateError
from ludo_engine.piece import Piece
from ludo_engine.rules import apply_move, validate_move
from ludo_engine.state import BoardState
from ludo_engine.types import TURN_ORDER, GamePhase, Move, Team


def placed(team: Team, position: int) -> Piece:
    pc = Piece(team=team, piece_id=0)
    pc.move_to(position)
    return pc


class TestInitialBoard(unittest.TestCase):
    def setUp(self):
        self.state = BoardState.initial()

    def test_sixteen_pieces_all_home(self):
        pieces = list(self.state.all_pieces())
        self.assertEqual(len(pieces), 16)
        for pc in pieces:
            self.assertTrue(pc.is_home)
            self.assertFalse(pc.is_finished)
            self.assertEqual(pc.position, -1)

    def test_each_team_has_its_own_four_pieces(self):
        for team in TURN_ORDER:
            pieces = self.state.team_pieces(team)
            self.assertEqual([pc.piece_id for pc in pieces], [0, 1, 2, 3])
            self.assertTrue(all(pc.team == team for pc in pieces))

    def test_initial_turn_and_phase(self):
        self.assertEqual(self.state.current_player, 0)
        self.assertEqual(self.state.current_team, Team.RED)
        self.assertEqual(self.state.last_dice_roll, 0)
        self.assertEqual(self.state.game_phase, GamePhase.SETUP)


class TestBoardGeometry(unittest.TestCase):
    def setUp(self):
        self.board = Board()

    def test_start_offsets(self):
        expected = {Team.RED: 1, Team.BLUE: 14, Team.GREEN: 27, Team.YELLOW: 40}
        for team, start in expected.items():
            self.assertEqual(self.board.start_offset(team), start)
            self.assertEqual(self.board.lane_entry(team), start + 51)

    def test_exit_home_needs_six(self):
        for team in TURN_ORDER:
            pc = Piece(team=team, piece_id=0)
            self.assertEqual(self.board.destination(pc, 6), self.board.start_offset(team))
            for roll in range(1, 6):
                self.assertIsNone(self.board.destination(pc, roll))

    def test_track_destination_wraps_mod_52(self):
        pc = placed(Team.YELLOW, 51)
        self.assertEqual(self.board.destination(pc, 3), 2)

    def test_track_destination_is_position_plus_roll(self):
        for team in TURN_ORDER:
            start = self.board.start_offset(team)
            for roll in range(1, 7):
                pc = placed(team, (start + 10) % 52)
                self.assertEqual(
                    self.board.destination(pc, roll), (pc.position + roll) % 52
                )

    def test_red_enters_lane_after_one_lap(self):
        pc = placed(Team.RED, 50)
        self.assertEqual(self.board.progress(Team.RED, 50), 49)
        self.assertEqual(self.board.destination(pc, 1), 51)
        self.assertEqual(self.board.destination(pc, 2), config.LANE_START)

    def test_blue_finishes_from_cell_before_its_lap_end(self):
        # blue's last track cell is 12 (progress 50)
        pc = placed(Team.BLUE, 12)
        self.assertEqual(self.board.progress(Team.BLUE, 12), 50)
        self.assertEqual(self.board.destination(pc, 1), 52)
        self.assertEqual(self.board.destination(pc, 6), config.FINISH_POSITION)

    def test_lane_progress_and_exact_finish(self):
        pc = placed(Team.RED, 54)
        self.assertEqual(self.board.progress(Team.RED, 54), 53)
        self.assertEqual(self.board.destination(pc, 3), 57)
        self.assertIsNone(self.board.destination(pc, 4))

    def test_finished_piece_has_no_destination(self):
        pc = placed(Team.GREEN, config.FINISH_POSITION)
        self.assertTrue(pc.is_finished)
        self.assertIsNone(self.board.destination(pc, 1))

    def test_position_for_progress_inverts_progress(self):
        for team in TURN_ORDER:
            for progress in range(0, config.FINISH_PROGRESS + 1):
                pos = self.board.position_for_progress(team, progress)
                self.assertEqual(self.board.progress(team, pos), progress)
        with self.assertRaises(ValueError):
            self.board.position_for_progress(Team.RED, 57)

    def test_safe_cells(self):
        for cell in (1, 9, 14, 22, 27, 35, 40, 48):
            self.assertTrue(self.board.is_safe(cell))
        for cell in (0, 2, 5, 13, 51):
            self.assertFalse(self.board.is_safe(cell))

    def test_lane_cells_are_not_shared_between_teams(self):
        self.assertFalse(self.board.shares_cell(placed(Team.RED, 53), placed(Team.BLUE, 53)))
        self.assertTrue(self.board.shares_cell(placed(Team.RED, 53), placed(Team.RED, 53)))
        self.assertTrue(self.board.shares_cell(placed(Team.RED, 7), placed(Team.BLUE, 7)))


class TestCustomBoard(unittest.TestCase):
    def setUp(self):
        # six lane cells: 52..57, finished at 58
        self.board = Board(cfg=Config(FINISH_LANE_LENGTH=6))

    def test_place_uses_board_finish_cell(self):
        pc = Piece(team=Team.RED, piece_id=0)
        self.board.place(pc, 57)
        self.assertFalse(pc.is_finished)
        self.board.place(pc, 58)
        self.assertTrue(pc.is_finished)
        self.board.place(pc, -1)
        self.assertTrue(pc.is_home)

    def test_rules_follow_injected_board(self):
        state = BoardState.initial()
        self.board.place(state.piece(Team.RED, 0), 56)
        move = Move(0, Team.RED, 56, 58, 2)
        self.assertTrue(validate_move(state, move, self.board).valid)

        new_state = apply_move(state, move, self.board)
        self.assertTrue(new_state.piece(Team.RED, 0).is_finished)
        self.assertEqual(new_state.counts(Team.RED), (3, 0, 1))

    def test_from_dict_follows_injected_board(self):
        state = BoardState.initial()
        self.board.place(state.piece(Team.BLUE, 1), 57)
        restored = BoardState.from_dict(state.to_dict(), self.board)
        self.assertTrue(restored.piece(Team.BLUE, 1).is_active)
        with self.assertRaises(BoardStateError):
            BoardState.from_dict(state.to_dict())


if __name__ == "__main__":
    unittest.main()
