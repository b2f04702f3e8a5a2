"""
Sound cues for the desktop game, played through pygame.mixer.
A missing file or audio device leaves the cue silent; the game keeps going.
"""
from pathlib import Path

import pygame

from simulation import Cue

SOUND_DIR = Path(__file__).parent / "static"
CUE_FILES = {
    Cue.PADDLE_HIT: "paddle_hit.wav",
    Cue.FAIL: "failure.wav",
}
VOLUME = 0.8


class SoundCues:
    def __init__(self, sound_dir=SOUND_DIR, enabled=True):
        self.sounds = {}
        if enabled:
            self.load(Path(sound_dir))

    def load(self, sound_dir):
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
        except pygame.error as e:
            print(f"[Sound] Audio unavailable, cues muted: {e}")
            return

        for cue, filename in CUE_FILES.items():
            path = sound_dir / filename
            if not path.exists():
                print(f"[Sound] Missing cue file: {path}")
                continue
            try:
                sound = pygame.mixer.Sound(str(path))
            except pygame.error as e:
                print(f"[Sound] Could not load {filename}: {e}")
                continue
            sound.set_volume(VOLUME)
            self.sounds[cue] = sound

    def play(self, kind):
        sound = self.sounds.get(kind)
        if sound is None:
            return
        # Restart the cue if it is still playing from the last hit
        sound.stop()
        sound.play()
