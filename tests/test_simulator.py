import unittest

from ludo_engine.engine import BoardEngine
from ludo_engine.session import SessionStore
from ludo_engine.strategy import RandomStrategy
from ludo_engine.types import TURN_ORDER
from tools.simulate import parse_args, play_game


class TestRandomPlayInvariants(unittest.TestCase):
    def test_random_games_keep_board_invariants(self):
        for seed in range(5):
            engine = BoardEngine(seed=seed)
            strategy = RandomStrategy(rng_seed=seed)
            for _ in range(600):
                if engine.is_finished:
                    break
                dice = engine.roll_dice()
                move = strategy.select_move(engine.legal_moves(dice))
                if move is None:
                    engine.pass_turn(dice)
                    continue
                self.assertTrue(engine.process_move(move).valid)

                pieces = list(engine.state.all_pieces())
                self.assertEqual(len(pieces), 16)
                for team in TURN_ORDER:
                    placed = [
                        pc.position
                        for pc in engine.state.team_pieces(team)
                        if not pc.is_home and not pc.is_finished
                    ]
                    # no same-team stacking
                    self.assertEqual(len(placed), len(set(placed)))
                for pc in pieces:
                    self.assertTrue(-1 <= pc.position <= 57)
                    self.assertEqual(pc.is_home, pc.position == -1)
                    self.assertEqual(pc.is_finished, pc.position == 57)
                self.assertAlmostEqual(
                    sum(engine.win_probabilities().values()), 100.0
                )


class TestSimulateTool(unittest.TestCase):
    def test_parse_args_defaults(self):
        args = parse_args([])
        self.assertEqual(args.games, 1)
        self.assertEqual(args.mode, "standard")
        self.assertFalse(args.verbose)

    def test_play_game_summary(self):
        store = SessionStore()
        args = parse_args(["--seed", "1", "--max-turns", "200"])
        summary = play_game(store, "sim-0", args)
        self.assertEqual(summary["game_id"], "sim-0")
        self.assertLessEqual(summary["turns"], 200)
        self.assertLessEqual(summary["moves"], summary["turns"])
        self.assertAlmostEqual(sum(summary["standing"].values()), 100.0, places=0)
        self.assertNotIn("sim-0", store)

    def test_death_mode_stops_at_ceiling(self):
        store = SessionStore()
        args = parse_args(
            ["--seed", "2", "--mode", "death", "--max-moves", "5", "--max-turns", "500"]
        )
        summary = play_game(store, "sim-d", args)
        self.assertEqual(summary["status"], "terminated")
        self.assertEqual(summary["moves"], 5)


if __name__ == "__main__":
    unittest.main()
