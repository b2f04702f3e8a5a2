import numpy as np

from geometry import Box, clamp


class Paddle:
    def __init__(self, x, y, width, height, field_height):
        self.x = x
        self.width = width
        self.height = height
        self.field_height = field_height
        self.y = 0.0
        self.set_position(y)

    @property
    def max_y(self):
        return self.field_height - self.height

    @property
    def center_y(self):
        return self.y + self.height / 2

    def set_position(self, y):
        """Set paddle position, kept inside the field"""
        self.y = clamp(y, 0, self.max_y)

    def move(self, dy):
        self.set_position(self.y + dy)

    def center(self):
        self.set_position(self.max_y / 2)

    def box(self):
        return Box(self.x, self.y, self.width, self.height)


class Ball:
    def __init__(self, size):
        self.size = size
        self.x = 0.0
        self.y = 0.0
        self.vx = 0.0
        self.vy = 0.0

    @property
    def center_y(self):
        return self.y + self.size / 2

    def move(self):
        self.x += self.vx
        self.y += self.vy

    def box(self):
        return Box(self.x, self.y, self.size, self.size)


class Score:
    def __init__(self):
        self.player = 0
        self.opponent = 0

    def reset(self):
        self.player = 0
        self.opponent = 0

    def as_tuple(self):
        return self.player, self.opponent


class EntityState:
    """
    Everything that moves or counts on the field: both paddles, the ball and
    the score. Created once per game and mutated in place by the simulation.
    """
    def __init__(self, settings, rng=None):
        self.settings = settings
        self.rng = rng if rng is not None else np.random.default_rng(settings.seed)

        start_y = (settings.field_height - settings.paddle_height) / 2
        self.player = Paddle(settings.player_x, start_y, settings.paddle_width,
                             settings.paddle_height, settings.field_height)
        self.opponent = Paddle(settings.opponent_x, start_y, settings.paddle_width,
                               settings.paddle_height, settings.field_height)
        self.ball = Ball(settings.ball_size)
        self.score = Score()

    def set_player_y(self, raw_pointer_y):
        """Centre the player paddle on a pointer position."""
        self.player.set_position(raw_pointer_y - self.player.height / 2)

    def reset_ball(self, moving_allowed):
        """
        Put the ball back in the middle of the field.
        With moving_allowed the ball is served toward a random side at the base
        speed with a random vertical component in [-speed, speed]; otherwise
        it stays still.
        """
        s = self.settings
        self.ball.x = s.field_width / 2 - self.ball.size / 2
        self.ball.y = s.field_height / 2 - self.ball.size / 2
        if moving_allowed:
            self.ball.vx = s.ball_speed * (1 if self.rng.random() > 0.5 else -1)
            self.ball.vy = s.ball_speed * float(self.rng.uniform(-1.0, 1.0))
        else:
            self.ball.vx = 0.0
            self.ball.vy = 0.0

    def center_paddles(self):
        self.player.center()
        self.opponent.center()
