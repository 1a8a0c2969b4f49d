"""
Speech synthesis and audio storage configuration.

Amazon Polly voice parameters and where narration audio is written
(S3 bucket for deployments, local directory for development).

Dependencies: pydantic, pydantic_settings
System role: Narration configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from studycast.configs.base import BaseSettings


class SpeechSettings(BaseSettings):
    """Polly voice and narration storage configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SPEECH_",
        case_sensitive=False,
        extra="ignore",
    )

    region: str = Field(default="ap-southeast-2", description="AWS region for Polly and S3")
    voice_id: str = Field(default="Joanna", description="Polly voice id")
    engine: str = Field(default="neural", description="Polly engine (standard, neural)")
    output_format: str = Field(default="mp3", description="Polly audio output format")
    max_characters: int = Field(
        default=3000,
        description="Polly synthesize_speech text limit; longer text is synthesized in chunks",
    )

    audio_storage_type: str = Field(
        default="local",
        description="Narration storage: 's3' for deployments, 'local' for development",
    )
    audio_bucket: str = Field(default="studycast-dev-narrations", description="S3 bucket for audio")
    audio_prefix: str = Field(default="narrations", description="Key prefix inside the bucket")
    local_audio_dir: str = Field(default=".narrations", description="Directory for local audio")
