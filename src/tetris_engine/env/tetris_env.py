from __future__ import annotations

import logging
from enum import IntEnum
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tetris_engine.game import Board, BoardConfig, Cell, Direction, kind_count

logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    HOLD = 5
    NONE = 6


# RGB per Cell value, indexed by abs(state) so the falling overlay shares colours
_PALETTE = np.array(
    [
        (20, 20, 26),     # empty
        (90, 90, 100),    # wall
        (0, 240, 240),    # sky blue (I)
        (0, 0, 240),      # blue (J)
        (240, 160, 0),    # orange (L)
        (240, 240, 0),    # yellow (O)
        (0, 240, 0),      # green (S)
        (160, 0, 240),    # purple (T)
        (240, 0, 0),      # red (Z)
    ],
    dtype=np.uint8,
)


def _compute_action_mask(board: Board) -> np.ndarray:
    mask = np.ones(len(Action), dtype=np.bool_)
    if board.game_over:
        return mask
    mask[Action.LEFT] = board.can_move(Direction.LEFT)
    mask[Action.RIGHT] = board.can_move(Direction.RIGHT)
    mask[Action.ROTATE] = board.can_rotate()
    mask[Action.HOLD] = board.can_hold()
    return mask


class TetrisEnv(gym.Env):
    """
    Single-board falling-block environment; one env step is one host command.

    Actions (7 total):
      0: Move Left
      1: Move Right
      2: Rotate (in place, no kicks)
      3: Soft drop (one gravity tick; locks when the piece has landed)
      4: Hard drop
      5: Hold
      6: No-op

    Notes:
    - Reward is ``line_reward`` per cleared row, plus ``invalid_action_penalty``
      when a move/rotate/hold is rejected and ``terminal_penalty`` on top-out.
    - The episode terminates when a new piece no longer fits at the spawn point.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
        line_reward: float = 1.0,
        invalid_action_penalty: float = 0.0,
        terminal_penalty: float = 0.0,
        max_episode_steps: int = 10000,
    ) -> None:
        super().__init__()
        self.board = Board(config)
        self.render_mode = render_mode

        self.line_reward = float(line_reward)
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.terminal_penalty = float(terminal_penalty)
        self.max_episode_steps = int(max_episode_steps)

        width, height = self.board.dimensions()
        kinds = kind_count()
        top = int(max(Cell))
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=-top, high=top, shape=(height, width), dtype=np.int8),
                "active": spaces.Discrete(kinds),
                "next": spaces.Discrete(kinds),
                # kinds means nothing is held
                "held": spaces.Discrete(kinds + 1),
                "position": spaces.MultiDiscrete([height, width]),
            }
        )
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0

    # ---------- Helpers ----------
    def _get_obs(self) -> Dict[str, Any]:
        held = self.board.held_piece()
        row, col = self.board.active_position()
        return {
            "grid": self.board.get_state().astype(np.int8),
            "active": int(self.board.active_piece().kind),
            "next": int(self.board.next_piece().kind),
            "held": int(held.kind) if held is not None else kind_count(),
            "position": np.array([row, col], dtype=np.int64),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": _compute_action_mask(self.board),
            "rows_cleared_total": self.board.rows_cleared_total,
            "pieces_locked": self.board.pieces_locked,
            "stack_height": self.board.grid.get_max_height(),
            "holes": self.board.grid.count_holes(),
            "steps": self._steps,
        }

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.board)

    def _apply(self, action: Action) -> Tuple[bool, int]:
        """Run one command; returns (accepted, rows cleared)."""
        if action == Action.LEFT:
            return self.board.move(Direction.LEFT), 0
        if action == Action.RIGHT:
            return self.board.move(Direction.RIGHT), 0
        if action == Action.ROTATE:
            return self.board.rotate(), 0
        if action == Action.HOLD:
            return self.board.hold(), 0
        if action == Action.SOFT_DROP:
            result = self.board.tick()
            return True, result.rows_cleared if result is not None else 0
        if action == Action.HARD_DROP:
            result = self.board.hard_drop()
            return True, result.rows_cleared if result is not None else 0
        return True, 0

    # ---------- Gym API ----------
    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.board.reset(seed)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        accepted, rows = self._apply(Action(int(action)))

        reward_components: Dict[str, float] = {"lines": self.line_reward * float(rows)}
        if not accepted:
            reward_components["invalid"] = self.invalid_action_penalty

        terminated = bool(self.board.game_over)
        if terminated:
            reward_components["terminal"] = self.terminal_penalty
            logger.debug("Episode finished after %d steps", self._steps + 1)
        self._steps += 1
        truncated = not terminated and self._steps >= self.max_episode_steps

        reward = float(sum(reward_components.values()))
        info = self._get_info()
        info["reward_components"] = reward_components
        info["rows_cleared"] = rows
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            cell = 12
            state = np.abs(self.board.get_state())
            img = _PALETTE[state]
            return np.repeat(np.repeat(img, cell, axis=0), cell, axis=1)
        # human rendering lives in tetris_engine.visualization
        return None

    def close(self) -> None:
        pass
