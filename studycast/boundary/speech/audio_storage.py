"""
Narration audio storage.

Persists synthesized audio and returns the reference stored on the Summary.
S3 for deployments, a local directory for development.

Dependencies: boto3, botocore
System role: Narration audio persistence
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from uuid import UUID

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from studycast.core.exceptions import StorageError

logger = logging.getLogger(__name__)

_EXTENSIONS = {
    "audio/mpeg": "mp3",
    "audio/ogg": "ogg",
    "audio/pcm": "pcm",
}


def audio_filename(summary_id: UUID, content_type: str) -> str:
    """Deterministic object name for a summary's narration."""
    return f"{summary_id}.{_EXTENSIONS.get(content_type, 'bin')}"


class AudioStorage(ABC):
    """Write narration audio, resolve references for playback."""

    @abstractmethod
    async def save(self, summary_id: UUID, audio: bytes, content_type: str) -> str:
        """
        Store audio for a summary.

        Returns:
            str: Narration reference to attach to the summary

        Raises:
            StorageError: If the write fails
        """

    @abstractmethod
    def playback_url(self, narration_ref: str) -> str:
        """URL or path the UI can use to play a stored narration."""


class S3AudioStorage(AudioStorage):
    """Narration storage in an S3 bucket."""

    def __init__(
        self,
        bucket: str,
        prefix: str = "narrations",
        region: str = "ap-southeast-2",
        url_expiry: int = 3600,
        client=None,
    ) -> None:
        """
        Initialize S3 audio storage.

        Args:
            bucket: S3 bucket name
            prefix: Key prefix for narration objects
            region: AWS region for the bucket
            url_expiry: Presigned playback URL lifetime in seconds
            client: Optional preconfigured boto3 S3 client
        """
        self._bucket = bucket
        self._prefix = prefix.strip("/")
        self._url_expiry = url_expiry
        self._s3_client = client or boto3.client("s3", region_name=region)

    def _key(self, summary_id: UUID, content_type: str) -> str:
        return f"{self._prefix}/{audio_filename(summary_id, content_type)}"

    async def save(self, summary_id: UUID, audio: bytes, content_type: str) -> str:
        key = self._key(summary_id, content_type)
        try:
            await asyncio.to_thread(
                self._s3_client.put_object,
                Bucket=self._bucket,
                Key=key,
                Body=audio,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageError(
                f"Failed to upload narration: {e}",
                operation="save_audio",
                details={"bucket": self._bucket, "key": key},
            ) from e

        logger.info(f"{__name__}:save - Narration uploaded to s3://{self._bucket}/{key}")
        return f"s3://{self._bucket}/{key}"

    def playback_url(self, narration_ref: str) -> str:
        """
        Generate presigned URL for streaming a narration.

        Args:
            narration_ref: s3:// reference returned by save()

        Returns:
            str: Presigned GET URL
        """
        key = narration_ref.removeprefix(f"s3://{self._bucket}/")
        try:
            return self._s3_client.generate_presigned_url(
                ClientMethod="get_object",
                Params={"Bucket": self._bucket, "Key": key},
                ExpiresIn=self._url_expiry,
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Could not sign narration URL: {e}", operation="playback_url") from e


class LocalAudioStorage(AudioStorage):
    """Narration storage in a local directory."""

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)

    def _write(self, path: Path, audio: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(audio)

    async def save(self, summary_id: UUID, audio: bytes, content_type: str) -> str:
        path = self._directory / audio_filename(summary_id, content_type)
        try:
            await asyncio.to_thread(self._write, path, audio)
        except OSError as e:
            raise StorageError(
                f"Failed to write narration: {e}",
                operation="save_audio",
                details={"path": str(path)},
            ) from e
        return str(path)

    def playback_url(self, narration_ref: str) -> str:
        return Path(narration_ref).resolve().as_uri()
