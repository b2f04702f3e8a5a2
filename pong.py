import argparse
import sys

import pygame

from frame_driver import FrameDriver
from session import AlwaysRunning, Session
from settings import Settings
from simulation import Simulation
from sound import SoundCues

STATUS_BAR_HEIGHT = 40
CLOCK_EVENT = pygame.USEREVENT + 1

# Colors
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
GREY = (120, 120, 120)
PLAYER_COLOR = (97, 218, 251)
OPPONENT_COLOR = (250, 86, 86)
BUTTON_COLOR = (40, 40, 40)


class PygameTicker:
    """Once-a-second clock refresh driven by a pygame timer event"""
    def __init__(self, interval_ms=1000):
        self.interval_ms = interval_ms
        self.callback = None

    def start(self, callback):
        self.callback = callback
        pygame.time.set_timer(CLOCK_EVENT, self.interval_ms)

    def stop(self):
        pygame.time.set_timer(CLOCK_EVENT, 0)
        self.callback = None

    def fire(self):
        if self.callback is not None:
            self.callback()


class Game:
    def __init__(self, settings, mute=False):
        self.settings = settings
        self.width = int(settings.field_width)
        self.field_height = int(settings.field_height)
        self.screen = pygame.display.set_mode((self.width, self.field_height + STATUS_BAR_HEIGHT))
        pygame.display.set_caption("Pong - You vs Computer")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 54)
        self.small_font = pygame.font.Font(None, 28)

        self.sounds = SoundCues(enabled=not mute)
        self.ticker = PygameTicker()
        session = Session(ticker=self.ticker) if settings.gated else AlwaysRunning()
        self.simulation = Simulation(settings, session=session, play_cue=self.sounds.play)
        self.driver = FrameDriver(self.simulation, self.draw)

        bar_y = self.field_height
        self.start_button = pygame.Rect(10, bar_y + 6, 90, STATUS_BAR_HEIGHT - 12)
        self.restart_button = pygame.Rect(110, bar_y + 6, 90, STATUS_BAR_HEIGHT - 12)

    def handle_event(self, event):
        if event.type == pygame.MOUSEMOTION:
            # Pointer is only meaningful over the field
            if event.pos[1] < self.field_height:
                self.simulation.report_pointer_y(event.pos[1])
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.start_button.collidepoint(event.pos):
                self.start()
            elif self.restart_button.collidepoint(event.pos):
                self.restart()
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_SPACE:
                self.start()
            elif event.key == pygame.K_r:
                self.restart()
        elif event.type == CLOCK_EVENT:
            self.ticker.fire()

    def start(self):
        if self.simulation.start():
            print("Game started")

    def restart(self):
        if self.settings.gated:
            self.simulation.restart()
            print("Game reset")

    def draw_button(self, rect, label):
        pygame.draw.rect(self.screen, BUTTON_COLOR, rect, border_radius=4)
        pygame.draw.rect(self.screen, GREY, rect, 1, border_radius=4)
        text = self.small_font.render(label, True, WHITE)
        self.screen.blit(text, text.get_rect(center=rect.center))

    def draw(self, snapshot):
        self.screen.fill(BLACK)

        # Draw paddles
        pygame.draw.rect(self.screen, PLAYER_COLOR,
                         (snapshot.player_x, snapshot.player_y, snapshot.paddle_width, snapshot.paddle_height))
        pygame.draw.rect(self.screen, OPPONENT_COLOR,
                         (snapshot.opponent_x, snapshot.opponent_y, snapshot.paddle_width, snapshot.paddle_height))

        # Draw ball
        radius = snapshot.ball_size / 2
        pygame.draw.circle(self.screen, WHITE, (snapshot.ball_x + radius, snapshot.ball_y + radius), radius)

        # Draw scores
        score_player_text = self.font.render(str(snapshot.score_player), True, WHITE)
        score_opponent_text = self.font.render(str(snapshot.score_opponent), True, WHITE)
        self.screen.blit(score_player_text, score_player_text.get_rect(center=(self.width // 4, 35)))
        self.screen.blit(score_opponent_text, score_opponent_text.get_rect(center=(3 * self.width // 4, 35)))

        # Status bar: buttons and clock (gated game only)
        bar = pygame.Rect(0, self.field_height, self.width, STATUS_BAR_HEIGHT)
        pygame.draw.rect(self.screen, (20, 20, 20), bar)
        pygame.draw.line(self.screen, GREY, bar.topleft, bar.topright, 1)
        if self.settings.gated:
            self.draw_button(self.start_button, "Start")
            self.draw_button(self.restart_button, "Reset")
            clock_text = self.small_font.render(snapshot.elapsed, True, WHITE)
            self.screen.blit(clock_text, clock_text.get_rect(midright=(self.width - 12, bar.centery)))
            if not snapshot.running:
                hint = self.small_font.render("SPACE to start", True, GREY)
                self.screen.blit(hint, hint.get_rect(center=(self.width // 2, self.field_height // 2 + 60)))

        pygame.display.flip()

    def run(self):
        running = True

        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                else:
                    self.handle_event(event)

            self.driver.tick()
            self.clock.tick(self.settings.fps)

        self.ticker.stop()
        pygame.quit()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Play Pong against the computer')
    parser.add_argument('--always-running', action='store_true',
                        help='Serve the ball immediately, no start button or clock')
    parser.add_argument('--autoplay', action='store_true',
                        help='Let the computer play your paddle too')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for the ball serve direction')
    parser.add_argument('--fps', type=int, default=None,
                        help='Frames per second (default: 60)')
    parser.add_argument('--mute', action='store_true', help='Disable sound cues')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    try:
        settings = Settings().with_overrides(
            gated=not args.always_running,
            autoplay=args.autoplay,
            seed=args.seed,
            fps=args.fps,
        )
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    pygame.init()
    game = Game(settings, mute=args.mute)
    game.run()


if __name__ == "__main__":
    main()
