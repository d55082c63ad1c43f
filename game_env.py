import os

import gymnasium as gym
from gymnasium.spaces import MultiDiscrete, Box
import numpy as np
import pygame
import pygame.gfxdraw

from controls import MOVEMENT_DIRECTIONS, movement_for_key
from drawing import CELL_SIZE, project
from game_clock import GameClock
from game_state import MAZE_SIZE, move, new_game, reset_game
from maze_generator import find_goal


os.environ.setdefault("SDL_VIDEODRIVER", "dummy")


class GameEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"]}

    user_guide = (
        "Controls: Use arrow keys (or WASD) to move one cell at a time. "
        "Press R for a new game."
    )

    game_description = (
        "Escape a random maze: grab gold coins, dodge the blinking red traps and reach the blue goal. "
        "After 5 wins the water starts rising, after 10 an enemy hunts you down."
    )

    # Timers advance by one frame per step, so frames advance on their own
    auto_advance = True

    # --- Constants ---
    SCREEN_WIDTH = 640
    SCREEN_HEIGHT = 480
    BOARD_SIZE = MAZE_SIZE * CELL_SIZE
    BOARD_Y_OFFSET = 50
    FPS = 30
    FRAME_MS = 1000 / FPS
    MAX_STEPS = FPS * 60 * 3

    LOSS_PENALTY = 10

    # Colors
    COLOR_BG = (17, 24, 39)
    COLOR_BOARD = (255, 255, 255)
    COLOR_TEXT = (220, 220, 220)
    COLOR_SCORE = (234, 179, 8)
    COLOR_WINS = (59, 130, 246)
    COLOR_LOSE = (239, 68, 68)
    COLOR_WIN = (34, 197, 94)

    def __init__(self, render_mode="rgb_array"):
        super().__init__()
        self.render_mode = render_mode

        self.observation_space = Box(
            low=0, high=255, shape=(self.SCREEN_HEIGHT, self.SCREEN_WIDTH, 3), dtype=np.uint8
        )
        self.action_space = MultiDiscrete([5, 2, 2])

        pygame.init()
        pygame.font.init()
        self.screen = pygame.Surface((self.SCREEN_WIDTH, self.SCREEN_HEIGHT))
        self.clock = pygame.time.Clock()
        self.font_small = pygame.font.SysFont("monospace", 16, bold=True)
        self.font_large = pygame.font.SysFont("monospace", 24, bold=True)

        self.game_clock = GameClock()
        self.state = None
        self.cell_size = CELL_SIZE
        self.steps = 0
        self.prev_movement = 0

        # This will be initialized in reset()
        self.np_random = None

    def reset(self, seed=None, options=None):
        super().reset(seed=seed)
        options = options or {}

        size = options.get("size")
        if options.get("keep_progress") and self.state is not None:
            self.state = reset_game(self.state, self.np_random, size=size)
        else:
            self.state = new_game(self.np_random, size=MAZE_SIZE if size is None else size)

        self.cell_size = max(1, min(CELL_SIZE, self.BOARD_SIZE // self.state.size))
        self.game_clock.reset()
        self.steps = 0
        self.prev_movement = 0

        return self._get_observation(), self._get_info()

    def step(self, action):
        if self.state.finished:
            return self._get_observation(), 0, True, False, self._get_info()

        movement = int(action[0])
        score_before = self.state.score

        # Edge-triggered so a held key moves one cell, like a key-down event
        if movement != 0 and movement != self.prev_movement:
            self.state = move(self.state, MOVEMENT_DIRECTIONS[movement])
        self.prev_movement = movement

        self.state = self.game_clock.advance(self.state, self.FRAME_MS)
        self.steps += 1

        reward = self.state.score - score_before
        if self.state.game_over:
            reward -= self.LOSS_PENALTY

        terminated = self.state.finished
        truncated = self.steps >= self.MAX_STEPS and not terminated

        return self._get_observation(), reward, terminated, truncated, self._get_info()

    def move_player(self, direction):
        """Applies a named move outside the frame loop, e.g. from on-screen buttons."""
        self.state = move(self.state, direction)
        return self._get_info()

    def _get_observation(self):
        self.screen.fill(self.COLOR_BG)
        self._render_game()
        self._render_ui()

        arr = pygame.surfarray.array3d(self.screen)
        return np.transpose(arr, (1, 0, 2)).astype(np.uint8)

    def _get_info(self):
        return {
            "score": self.state.score,
            "steps": self.steps,
            "games_won": self.state.games_won,
            "water_level": self.state.water_level,
            "player_pos": list(self.state.player),
            "enemy_pos": list(self.state.enemy) if self.state.enemy is not None else None,
            "goal_pos": list(find_goal(self.state.maze)),
            "won": self.state.won,
            "game_over": self.state.game_over,
        }

    def _render_game(self):
        board_px = self.state.size * self.cell_size
        board = pygame.Surface((board_px + 1, board_px + 1))
        board.fill(self.COLOR_BOARD)

        for op in project(self.state, self.cell_size):
            if op.kind == "line":
                start, end = op.points
                pygame.draw.line(board, op.color, start, end, op.size)
            elif op.kind == "rect":
                pygame.draw.rect(board, op.color, pygame.Rect(op.points[0], op.size))
            elif op.kind == "circle":
                cx, cy = op.points[0]
                pygame.gfxdraw.aacircle(board, cx, cy, op.size, op.color)
                pygame.gfxdraw.filled_circle(board, cx, cy, op.size, op.color)
            elif op.kind == "overlay":
                overlay = pygame.Surface(op.size, pygame.SRCALPHA)
                overlay.fill(op.color)
                board.blit(overlay, op.points[0])
            else:
                raise ValueError(f"Unknown draw instruction: {op.kind!r}")

        x_offset = (self.SCREEN_WIDTH - board_px) // 2
        self.screen.blit(board, (x_offset, self.BOARD_Y_OFFSET))

    def _render_ui(self):
        score_text = self.font_large.render(f"Score: {self.state.score}", True, self.COLOR_SCORE)
        self.screen.blit(score_text, (20, 12))

        wins_text = self.font_large.render(f"Wins: {self.state.games_won}", True, self.COLOR_WINS)
        wins_rect = wins_text.get_rect(right=self.SCREEN_WIDTH - 20, y=12)
        self.screen.blit(wins_text, wins_rect)

        if self.state.game_over:
            banner = self.font_large.render("Game Over!", True, self.COLOR_LOSE)
        elif self.state.won:
            banner = self.font_large.render("You Won!", True, self.COLOR_WIN)
        else:
            banner = None
        if banner is not None:
            banner_rect = banner.get_rect(centerx=self.SCREEN_WIDTH // 2, y=12)
            self.screen.blit(banner, banner_rect)

        if self.state.last_message:
            message_surf = self.font_small.render(self.state.last_message, True, self.COLOR_TEXT)
            message_rect = message_surf.get_rect(centerx=self.SCREEN_WIDTH // 2, bottom=self.SCREEN_HEIGHT - 6)
            self.screen.blit(message_surf, message_rect)

    def render(self):
        return self._get_observation()

    def close(self):
        pygame.font.quit()
        pygame.quit()

    def validate_implementation(self):
        """Call this after construction to verify the implementation."""
        # Test action space
        assert self.action_space.shape == (3,)
        assert self.action_space.nvec.tolist() == [5, 2, 2]

        # Test reset
        obs, info = self.reset(seed=0)
        assert obs.shape == (self.SCREEN_HEIGHT, self.SCREEN_WIDTH, 3)
        assert obs.dtype == np.uint8
        assert isinstance(info, dict)
        assert info["player_pos"] == [0, 0]

        # Test step
        test_action = self.action_space.sample()
        obs, reward, term, trunc, info = self.step(test_action)
        assert obs.shape == (self.SCREEN_HEIGHT, self.SCREEN_WIDTH, 3)
        assert isinstance(reward, (int, float))
        assert isinstance(term, bool)
        assert isinstance(trunc, bool)
        assert isinstance(info, dict)

        print("✓ Implementation validated successfully")


if __name__ == "__main__":
    # Manual play. Needs a real video driver, so drop the dummy one first.
    if os.environ.get("SDL_VIDEODRIVER") == "dummy":
        del os.environ["SDL_VIDEODRIVER"]

    env = GameEnv()
    obs, info = env.reset()

    pygame.display.set_caption("Coin Maze")
    render_screen = pygame.display.set_mode((env.SCREEN_WIDTH, env.SCREEN_HEIGHT))

    print(env.game_description)
    print(env.user_guide)

    running = True
    while running:
        movement = 0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_r:
                obs, info = env.reset(options={"keep_progress": True})

        keys = pygame.key.get_pressed()
        for key in (pygame.K_UP, pygame.K_w, pygame.K_DOWN, pygame.K_s,
                    pygame.K_LEFT, pygame.K_a, pygame.K_RIGHT, pygame.K_d):
            if keys[key]:
                movement = movement_for_key(key)
                break

        obs, reward, terminated, truncated, info = env.step([movement, 0, 0])

        surf = pygame.surfarray.make_surface(np.transpose(obs, (1, 0, 2)))
        render_screen.blit(surf, (0, 0))
        pygame.display.flip()

        env.clock.tick(env.FPS)

        if terminated or truncated:
            print(f"{'Won' if info['won'] else 'Game Over'}! Score: {info['score']}, Wins: {info['games_won']}")
            pygame.time.wait(2000)
            obs, info = env.reset(options={"keep_progress": True})

    env.close()
