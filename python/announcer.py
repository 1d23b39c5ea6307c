#!/usr/bin/env python3
"""Spoken call-out of the winning number."""

from __future__ import annotations

import importlib
import importlib.util
import logging
import threading

from spin_engine import SpinOutcome

logger = logging.getLogger(__name__)

_pyttsx3_spec = importlib.util.find_spec("pyttsx3")
if _pyttsx3_spec is None:
    pyttsx3 = None
    TTS_AVAILABLE = False
else:
    pyttsx3 = importlib.import_module("pyttsx3")
    TTS_AVAILABLE = True


def outcome_sentence(outcome: SpinOutcome) -> str:
    if outcome.number == 0:
        return "Zero, green."
    return f"{outcome.number}, {outcome.color.value}."


class Announcer:
    """Speaks each outcome on a background thread so the UI never waits."""

    def __init__(self, enabled: bool = True, rate: int = 150) -> None:
        self.enabled = enabled and TTS_AVAILABLE
        self.rate = rate
        self.tts_lock = threading.Lock()
        self.done_event = threading.Event()
        self.done_event.set()
        if enabled and not TTS_AVAILABLE:
            logger.warning("pyttsx3 is not installed; announcements are off")

    def announce(self, outcome: SpinOutcome) -> None:
        if not self.enabled:
            return
        sentence = outcome_sentence(outcome)
        self.done_event.clear()

        def _speak() -> None:
            engine = None
            try:
                with self.tts_lock:
                    engine = pyttsx3.init()
                    engine.setProperty("rate", self.rate)
                    engine.say(sentence)
                    engine.runAndWait()
            except Exception as exc:
                logger.warning("TTS error: %s", exc)
            finally:
                if engine:
                    engine.stop()
                self.done_event.set()

        threading.Thread(target=_speak, daemon=True).start()
