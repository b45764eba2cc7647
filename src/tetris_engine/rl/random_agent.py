from __future__ import annotations

import gymnasium as gym
import numpy as np

import tetris_engine.env  # noqa: F401  (registers Tetris-12x30-v0)


def run_random(steps: int = 2000, seed: int = 0) -> float:
    env = gym.make("Tetris-12x30-v0")
    obs, info = env.reset(seed=seed)
    rng = np.random.default_rng(seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        # Prefer accepted commands
        valid = np.flatnonzero(info["action_mask"])
        action = int(rng.choice(valid))
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            obs, info = env.reset()
    env.close()
    print(f"Random agent total reward: {total_reward:.2f} over {episodes} finished episodes")
    return total_reward


if __name__ == "__main__":  # pragma: no cover
    run_random()
