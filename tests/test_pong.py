import pygame
import pytest

import pong
from settings import Settings


class FakeClock:
    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def game():
    pygame.init()
    game = pong.Game(Settings(seed=1), mute=True)
    yield game
    game.ticker.stop()
    pygame.quit()


def click(pos):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=pos, button=1)


def key(k):
    return pygame.event.Event(pygame.KEYDOWN, key=k)


def test_mouse_motion_moves_player_paddle(game):
    game.handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=(100, 200)))
    assert game.simulation.state.player.y == 155


def test_mouse_over_status_bar_is_ignored(game):
    game.handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=(100, 330)))
    assert game.simulation.state.player.y == 115


def test_space_starts_and_r_resets(game):
    game.handle_event(key(pygame.K_SPACE))
    assert game.simulation.session.is_running
    assert abs(game.simulation.state.ball.vx) == 6

    game.simulation.state.score.player = 2
    game.handle_event(key(pygame.K_r))
    assert not game.simulation.session.is_running
    assert game.simulation.state.score.as_tuple() == (0, 0)


def test_buttons_start_and_reset(game):
    game.handle_event(click(game.restart_button.center))
    assert not game.simulation.session.is_running

    game.handle_event(click(game.start_button.center))
    assert game.simulation.session.is_running

    game.handle_event(click(game.restart_button.center))
    assert not game.simulation.session.is_running


def test_click_outside_buttons_does_nothing(game):
    game.handle_event(click((300, 100)))
    assert not game.simulation.session.is_running


def test_clock_event_refreshes_elapsed_time(game):
    clock = FakeClock(100.0)
    game.simulation.session.clock = clock
    game.handle_event(key(pygame.K_SPACE))

    clock.now = 165.0
    game.handle_event(pygame.event.Event(pong.CLOCK_EVENT))
    assert game.simulation.snapshot().elapsed == "01:05"


def test_clock_event_after_reset_is_ignored(game):
    clock = FakeClock(100.0)
    game.simulation.session.clock = clock
    game.handle_event(key(pygame.K_SPACE))
    game.handle_event(key(pygame.K_r))
    assert game.ticker.callback is None

    clock.now = 130.0
    game.handle_event(pygame.event.Event(pong.CLOCK_EVENT))
    assert game.simulation.snapshot().elapsed == "00:00"


def test_tick_draws_a_frame(game):
    game.handle_event(key(pygame.K_SPACE))
    game.driver.tick()
    assert game.driver.frames == 1


def test_always_running_game_has_no_reset():
    pygame.init()
    try:
        game = pong.Game(Settings(gated=False, seed=1), mute=True)
        game.simulation.state.score.opponent = 3
        game.handle_event(key(pygame.K_r))
        assert game.simulation.state.score.opponent == 3
        assert game.simulation.session.is_running
    finally:
        pygame.quit()


def test_parse_args_flags():
    args = pong.parse_args(['--always-running', '--autoplay', '--seed', '4', '--fps', '30', '--mute'])
    assert args.always_running and args.autoplay and args.mute
    assert (args.seed, args.fps) == (4, 30)

    args = pong.parse_args([])
    assert not args.always_running
    assert args.seed is None and args.fps is None


def test_main_rejects_invalid_setting(capsys):
    with pytest.raises(SystemExit) as exc:
        pong.main(['--fps', '0'])
    assert exc.value.code == 1
    assert "Error: fps must be positive" in capsys.readouterr().out
