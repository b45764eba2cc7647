from __future__ import annotations

import unittest

import gymnasium as gym
import numpy as np

import tetris_engine.env  # noqa: F401
from tetris_engine.env.tetris_env import Action, TetrisEnv
from tetris_engine.env.wrappers import ResampleInvalidActionWrapper
from tetris_engine.game import BoardConfig, Direction
from tetris_engine.rl.random_agent import run_random


class TestTetrisEnv(unittest.TestCase):
    def test_registered_env_observation_in_space(self) -> None:
        env = gym.make("Tetris-12x30-v0")
        obs, info = env.reset(seed=3)
        self.assertTrue(env.observation_space.contains(obs))
        self.assertEqual(obs["grid"].shape, (30, 12))
        self.assertEqual(obs["held"], 7)
        self.assertEqual(info["action_mask"].shape, (7,))
        obs, reward, terminated, truncated, info = env.step(int(Action.HARD_DROP))
        self.assertTrue(env.observation_space.contains(obs))
        self.assertFalse(terminated)
        self.assertEqual(info["pieces_locked"], 1)
        env.close()

    def test_seeded_resets_repeat(self) -> None:
        env = TetrisEnv()
        first, _ = env.reset(seed=11)
        env.step(int(Action.HARD_DROP))
        second, _ = env.reset(seed=11)
        self.assertEqual(first["active"], second["active"])
        self.assertEqual(first["next"], second["next"])
        np.testing.assert_array_equal(first["grid"], second["grid"])

    def test_invalid_action_penalty(self) -> None:
        env = TetrisEnv(invalid_action_penalty=-1.0)
        env.reset(seed=0)
        while env.board.move(Direction.LEFT):
            pass
        self.assertFalse(env.get_action_mask()[Action.LEFT])
        _, reward, _, _, info = env.step(int(Action.LEFT))
        self.assertEqual(reward, -1.0)
        self.assertIn("invalid", info["reward_components"])

    def test_hold_updates_observation(self) -> None:
        env = TetrisEnv()
        obs, _ = env.reset(seed=4)
        active = obs["active"]
        obs, _, _, _, _ = env.step(int(Action.HOLD))
        self.assertEqual(obs["held"], active)

    def test_top_out_terminates(self) -> None:
        env = TetrisEnv(config=BoardConfig(width=6, height=8), terminal_penalty=-5.0)
        env.reset(seed=1)
        terminated = False
        reward = 0.0
        for _ in range(50):
            _, reward, terminated, truncated, _ = env.step(int(Action.HARD_DROP))
            if terminated:
                break
        self.assertTrue(terminated)
        self.assertLessEqual(reward, -4.0)

    def test_truncation(self) -> None:
        env = TetrisEnv(max_episode_steps=3)
        env.reset(seed=0)
        results = [env.step(int(Action.NONE)) for _ in range(3)]
        self.assertEqual([r[3] for r in results], [False, False, True])

    def test_rgb_render(self) -> None:
        env = TetrisEnv(render_mode="rgb_array")
        env.reset(seed=0)
        img = env.render()
        self.assertEqual(img.shape, (30 * 12, 12 * 12, 3))
        self.assertEqual(img.dtype, np.uint8)

    def test_resample_wrapper_avoids_rejected_actions(self) -> None:
        env = ResampleInvalidActionWrapper(TetrisEnv(invalid_action_penalty=-1.0))
        env.reset(seed=2)
        board = env.unwrapped.board
        while board.move(Direction.RIGHT):
            pass
        _, _, _, _, info = env.step(int(Action.RIGHT))
        self.assertNotIn("invalid", info["reward_components"])


class TestRandomAgent(unittest.TestCase):
    def test_runs_and_reports_reward(self) -> None:
        total = run_random(steps=300, seed=1)
        self.assertGreaterEqual(total, 0.0)


if __name__ == "__main__":
    unittest.main()
