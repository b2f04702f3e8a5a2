"""
One game of Pong: entity state, the per-tick update and the session commands.
"""
from dataclasses import asdict, dataclass
from enum import Enum

from entities import EntityState
from geometry import clamp, intersects
from opponent import TrackingPolicy
from session import AlwaysRunning, Session


class Cue(str, Enum):
    PADDLE_HIT = 'paddle_hit'
    FAIL = 'fail'


@dataclass(frozen=True)
class Snapshot:
    """What a renderer needs for one frame. Copies, never live objects."""
    player_x: float
    player_y: float
    opponent_x: float
    opponent_y: float
    paddle_width: float
    paddle_height: float
    ball_x: float
    ball_y: float
    ball_vx: float
    ball_vy: float
    ball_size: float
    score_player: int
    score_opponent: int
    elapsed: str
    running: bool
    hits: int

    def to_dict(self):
        return asdict(self)


def _no_cue(kind):
    pass


class Simulation:
    def __init__(self, settings, session=None, play_cue=None, rng=None):
        self.settings = settings
        if session is None:
            session = Session() if settings.gated else AlwaysRunning()
        self.session = session
        self.play_cue = play_cue or _no_cue
        self.state = EntityState(settings, rng=rng)
        self.opponent_policy = TrackingPolicy(settings.opponent_speed)
        # Autoplay uses the same tracking rules for the human side
        self.player_policy = TrackingPolicy(settings.opponent_speed) if settings.autoplay else None
        self.hits = 0
        self.state.reset_ball(self.session.is_running)

    def report_pointer_y(self, raw_y):
        if self.player_policy is None:
            self.state.set_player_y(raw_y)

    def start(self):
        """Launch the ball. Ignored while already running."""
        if self.session.start():
            self.state.reset_ball(True)
            return True
        return False

    def restart(self):
        """Zero the score and wait for the next start()."""
        if not self.settings.gated:
            return
        self.session.restart()
        self.state.score.reset()
        self.state.center_paddles()
        self.state.reset_ball(False)
        self.hits = 0

    def _deflect(self, paddle):
        ball = self.state.ball
        ball.vx = -ball.vx
        ball.vy = self.settings.deflection * (ball.center_y - paddle.center_y)
        self.hits += 1
        self.play_cue(Cue.PADDLE_HIT)

    def update(self):
        """Advance the game by one tick."""
        if not self.session.is_running:
            return

        s = self.settings
        state = self.state
        ball = state.ball

        ball.move()

        # Top/bottom walls
        if ball.y <= 0 or ball.y + ball.size >= s.field_height:
            ball.vy = -ball.vy
            ball.y = clamp(ball.y, 0, s.field_height - ball.size)

        # Paddles. A hit puts the ball flush against the paddle face
        if intersects(ball.box(), state.player.box()):
            ball.x = state.player.x + state.player.width
            self._deflect(state.player)

        if intersects(ball.box(), state.opponent.box()):
            ball.x = state.opponent.x - ball.size
            self._deflect(state.opponent)

        # Left/right exits score for the other side
        if ball.x < 0:
            state.score.opponent += 1
            self.play_cue(Cue.FAIL)
            state.reset_ball(self.session.is_running)
        if ball.x + ball.size > s.field_width:
            state.score.player += 1
            self.play_cue(Cue.FAIL)
            state.reset_ball(self.session.is_running)

        self.opponent_policy.move(state.opponent, ball)
        if self.player_policy is not None:
            self.player_policy.move(state.player, ball)

    def snapshot(self):
        state = self.state
        return Snapshot(
            player_x=state.player.x,
            player_y=state.player.y,
            opponent_x=state.opponent.x,
            opponent_y=state.opponent.y,
            paddle_width=self.settings.paddle_width,
            paddle_height=self.settings.paddle_height,
            ball_x=state.ball.x,
            ball_y=state.ball.y,
            ball_vx=state.ball.vx,
            ball_vy=state.ball.vy,
            ball_size=state.ball.size,
            score_player=state.score.player,
            score_opponent=state.score.opponent,
            elapsed=self.session.elapsed_text,
            running=self.session.is_running,
            hits=self.hits,
        )
