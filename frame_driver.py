import queue
import time


class FramePacer:
    """Fixed-rate frame pacing, same role as pygame's clock.tick(FPS)"""
    def __init__(self, fps=60, clock=time.perf_counter, sleep=time.sleep):
        self.frame_time = 1.0 / fps
        self.clock = clock
        self.sleep = sleep
        self.last_time = clock()

    def wait(self):
        """Sleep until the next frame is due."""
        elapsed = self.clock() - self.last_time
        sleep_time = self.frame_time - elapsed
        if sleep_time > 0.001:  # Only sleep if more than 1ms
            self.sleep(sleep_time)
        self.last_time = self.clock()


class FrameDriver:
    """
    Runs the simulation once per frame and hands the result to a renderer.

    Input arriving from other threads goes through submit(); queued commands
    are applied at the start of the next tick, before the simulation moves,
    so an input is always visible to the tick that follows it.
    """
    def __init__(self, simulation, render):
        self.simulation = simulation
        self.render = render
        self.commands = queue.SimpleQueue()
        self.frames = 0

    def submit(self, command, *args):
        self.commands.put((command, args))

    def apply_pending(self):
        while True:
            try:
                command, args = self.commands.get_nowait()
            except queue.Empty:
                return
            command(*args)

    def tick(self):
        self.apply_pending()
        self.simulation.update()
        self.render(self.simulation.snapshot())
        self.frames += 1

    def run(self, keep_running, pacer=None):
        pacer = pacer or FramePacer(self.simulation.settings.fps)
        while keep_running():
            self.tick()
            pacer.wait()
