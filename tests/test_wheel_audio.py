import logging
from unittest.mock import MagicMock, patch

import wheel_audio
from wheel_audio import SpinSounds


def test_no_paths_means_no_mixer():
    with patch("wheel_audio.pygame") as mock_pygame:
        sounds = SpinSounds()
        sounds.start_rolling()
        sounds.land()
    assert sounds.audio_ready is False
    mock_pygame.mixer.init.assert_not_called()


def test_plays_loop_and_landing(tmp_path):
    spin_file = tmp_path / "roll.wav"
    land_file = tmp_path / "land.wav"
    spin_file.write_bytes(b"")
    land_file.write_bytes(b"")
    spin_sound = MagicMock()
    land_sound = MagicMock()
    with patch("wheel_audio.pygame") as mock_pygame:
        mock_pygame.error = RuntimeError
        mock_pygame.mixer.get_init.return_value = False
        mock_pygame.mixer.Sound.side_effect = [spin_sound, land_sound]
        sounds = SpinSounds(spin_file, land_file)
        sounds.start_rolling()
        sounds.land()

    mock_pygame.mixer.init.assert_called_once()
    assert sounds.audio_ready is True
    spin_sound.play.assert_called_once_with(loops=-1)
    spin_sound.stop.assert_called_once()
    land_sound.play.assert_called_once()


def test_missing_files_leave_audio_off(tmp_path):
    with patch("wheel_audio.pygame") as mock_pygame:
        mock_pygame.error = RuntimeError
        mock_pygame.mixer.get_init.return_value = True
        sounds = SpinSounds(tmp_path / "nope.wav", None)
    assert sounds.audio_ready is False
    mock_pygame.mixer.Sound.assert_not_called()


def test_mixer_failure_disables_audio(tmp_path, caplog):
    spin_file = tmp_path / "roll.wav"
    spin_file.write_bytes(b"")
    with patch("wheel_audio.pygame") as mock_pygame:
        mock_pygame.error = RuntimeError
        mock_pygame.mixer.get_init.return_value = False
        mock_pygame.mixer.init.side_effect = RuntimeError("no audio device")
        with caplog.at_level(logging.WARNING, logger=wheel_audio.__name__):
            sounds = SpinSounds(spin_file)
        sounds.start_rolling()
    assert sounds.audio_ready is False
    assert "no audio device" in caplog.text


def test_stop_failure_is_logged(tmp_path, caplog):
    spin_file = tmp_path / "roll.wav"
    spin_file.write_bytes(b"")
    spin_sound = MagicMock()
    with patch("wheel_audio.pygame") as mock_pygame:
        mock_pygame.error = RuntimeError
        mock_pygame.mixer.get_init.return_value = True
        mock_pygame.mixer.Sound.return_value = spin_sound
        sounds = SpinSounds(spin_file)
        spin_sound.stop.side_effect = RuntimeError("mixer closed")
        with caplog.at_level(logging.WARNING, logger=wheel_audio.__name__):
            sounds.stop()
    assert "mixer closed" in caplog.text
