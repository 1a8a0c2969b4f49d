"""
Factories for the speech synthesizer and narration storage.

Dependencies: studycast.boundary.speech, studycast.configs
System role: Speech boundary instantiation and selection
"""

import logging

from studycast.boundary.speech.audio_storage import AudioStorage, LocalAudioStorage, S3AudioStorage
from studycast.boundary.speech.speech_synthesizer import PollySpeechSynthesizer, SpeechSynthesizer
from studycast.configs import get_settings

logger = logging.getLogger(__name__)


def get_speech_synthesizer() -> SpeechSynthesizer:
    """
    Create the Polly synthesizer from settings.

    Returns:
        SpeechSynthesizer: Configured synthesizer
    """
    config = get_settings().speech
    return PollySpeechSynthesizer(
        voice_id=config.voice_id,
        engine=config.engine,
        output_format=config.output_format,
        region=config.region,
        max_characters=config.max_characters,
    )


def get_audio_storage() -> AudioStorage:
    """
    Factory function to get narration storage based on SPEECH_AUDIO_STORAGE_TYPE.

    Returns:
        LocalAudioStorage or S3AudioStorage: Configured audio storage

    Raises:
        ValueError: If SPEECH_AUDIO_STORAGE_TYPE is invalid
    """
    config = get_settings().speech
    storage_type = config.audio_storage_type.lower()

    if storage_type == "local":
        logger.info(f"{__name__}:get_audio_storage - Using local directory {config.local_audio_dir}")
        return LocalAudioStorage(config.local_audio_dir)

    elif storage_type == "s3":
        logger.info(f"{__name__}:get_audio_storage - Using S3 bucket {config.audio_bucket}")
        return S3AudioStorage(
            bucket=config.audio_bucket,
            prefix=config.audio_prefix,
            region=config.region,
        )

    else:
        raise ValueError(
            f"Invalid SPEECH_AUDIO_STORAGE_TYPE: {storage_type}. Must be 'local' or 's3'."
        )
