#!/usr/bin/env python3
"""Sound effects for the spin: a rolling loop and a landing click."""

from __future__ import annotations

import logging
from pathlib import Path

import pygame

logger = logging.getLogger(__name__)


class SpinSounds:
    """Plays the configured clips through the pygame mixer.

    Any mixer failure turns the sounds off instead of interrupting the spin.
    """

    def __init__(self, spin_path: Path | None = None, land_path: Path | None = None) -> None:
        self.spin_path = spin_path
        self.land_path = land_path
        self.spin_sound = None
        self.land_sound = None
        self.audio_ready = False
        self._init_audio()

    def _init_audio(self) -> None:
        if not self.spin_path and not self.land_path:
            return
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
            if self.spin_path and self.spin_path.exists():
                self.spin_sound = pygame.mixer.Sound(str(self.spin_path))
            if self.land_path and self.land_path.exists():
                self.land_sound = pygame.mixer.Sound(str(self.land_path))
            self.audio_ready = self.spin_sound is not None or self.land_sound is not None
        except pygame.error as exc:
            logger.warning("Audio disabled: %s", exc)
            self.spin_sound = None
            self.land_sound = None
            self.audio_ready = False

    def start_rolling(self) -> None:
        if not self.audio_ready or not self.spin_sound:
            return
        try:
            self.spin_sound.play(loops=-1)
        except pygame.error as exc:
            logger.warning("Could not play spin sound: %s", exc)

    def land(self) -> None:
        if not self.audio_ready:
            return
        try:
            if self.spin_sound:
                self.spin_sound.stop()
            if self.land_sound:
                self.land_sound.play()
        except pygame.error as exc:
            logger.warning("Could not play landing sound: %s", exc)

    def stop(self) -> None:
        if not self.audio_ready:
            return
        try:
            if self.spin_sound:
                self.spin_sound.stop()
            if self.land_sound:
                self.land_sound.stop()
        except pygame.error as exc:
            logger.warning("Could not stop sounds: %s", exc)
