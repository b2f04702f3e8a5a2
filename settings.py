"""
Game configuration.
Defaults reproduce the classic browser version of the game (480x320 field).
"""
import os
from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class Settings:
    field_width: float = 480
    field_height: float = 320
    paddle_width: float = 12
    paddle_height: float = 90
    ball_size: float = 16
    paddle_inset: float = 20  # distance between a paddle and its side wall
    ball_speed: float = 6
    opponent_speed: float = 4
    deflection: float = 0.25  # vy per pixel of offset from the paddle centre
    fps: int = 60
    gated: bool = True  # False = ball moves from startup, no start button
    autoplay: bool = False  # player paddle driven by the tracking policy
    seed: Optional[int] = None

    @property
    def player_x(self):
        return self.paddle_inset

    @property
    def opponent_x(self):
        return self.field_width - self.paddle_inset - self.paddle_width

    def validate(self):
        """Raise ValueError if the values cannot make a playable field."""
        if self.field_width <= 0 or self.field_height <= 0:
            raise ValueError("field dimensions must be positive")
        if self.paddle_height > self.field_height:
            raise ValueError("paddle_height must fit inside the field")
        if self.ball_size <= 0 or self.ball_size > self.field_height:
            raise ValueError("ball_size must be positive and fit inside the field")
        if self.ball_speed <= 0:
            raise ValueError("ball_speed must be positive")
        # The opponent has to be slower than the ball or it can never be beaten
        if not 0 < self.opponent_speed < self.ball_speed:
            raise ValueError(
                f"opponent_speed ({self.opponent_speed}) must be positive and "
                f"below ball_speed ({self.ball_speed})"
            )
        if self.fps <= 0:
            raise ValueError("fps must be positive")
        return self

    def with_overrides(self, **changes):
        changes = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **changes).validate()

    @classmethod
    def from_env(cls, environ=None):
        """Build settings from PONG_* environment variables (web host)."""
        env = os.environ if environ is None else environ
        overrides = {}
        for name in ('ball_speed', 'opponent_speed', 'deflection'):
            value = env.get(f'PONG_{name.upper()}')
            if value is not None:
                overrides[name] = float(value)
        if 'PONG_FPS' in env:
            overrides['fps'] = int(env['PONG_FPS'])
        if 'PONG_SEED' in env:
            overrides['seed'] = int(env['PONG_SEED'])
        if 'PONG_GATED' in env:
            overrides['gated'] = env['PONG_GATED'].lower() not in ('0', 'false', 'no')
        return cls().with_overrides(**overrides)
