"""Speech synthesis and narration storage boundary."""

from studycast.boundary.speech.audio_storage import AudioStorage, LocalAudioStorage, S3AudioStorage
from studycast.boundary.speech.speech_factory import get_audio_storage, get_speech_synthesizer
from studycast.boundary.speech.speech_synthesizer import PollySpeechSynthesizer, SpeechSynthesizer

__all__ = [
    "AudioStorage",
    "LocalAudioStorage",
    "S3AudioStorage",
    "PollySpeechSynthesizer",
    "SpeechSynthesizer",
    "get_audio_storage",
    "get_speech_synthesizer",
]
