"""
Speech synthesis service.

Turns summary text into narration audio with Amazon Polly. boto3 is
blocking, so calls run in a worker thread.

Dependencies: boto3, botocore
System role: Speech synthesis boundary
"""

import asyncio
import logging
import re
from abc import ABC, abstractmethod

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from studycast.core.exceptions import NarrationError

logger = logging.getLogger(__name__)

POLLY_MAX_CHARACTERS = 3000

_SENTENCE_END = re.compile(r"(?<=[.!?])\s+")


def split_for_synthesis(text: str, max_characters: int = POLLY_MAX_CHARACTERS) -> list[str]:
    """
    Split text into chunks of at most max_characters for one synthesis call each.

    Chunks break between sentences. A single sentence longer than the limit
    breaks at the last space that fits, or mid-word when there is none.
    """
    chunks: list[str] = []
    current = ""
    for sentence in _SENTENCE_END.split(text.strip()):
        while len(sentence) > max_characters:
            cut = sentence.rfind(" ", 0, max_characters + 1)
            if cut <= 0:
                cut = max_characters
            if current:
                chunks.append(current)
                current = ""
            chunks.append(sentence[:cut].rstrip())
            sentence = sentence[cut:].lstrip()
        if not sentence:
            continue
        candidate = f"{current} {sentence}" if current else sentence
        if len(candidate) <= max_characters:
            current = candidate
        else:
            chunks.append(current)
            current = sentence
    if current:
        chunks.append(current)
    return chunks


class SpeechSynthesizer(ABC):
    """Text to audio bytes."""

    content_type: str = "audio/mpeg"

    @abstractmethod
    async def synthesize(self, text: str) -> bytes:
        """
        Synthesize speech for text.

        Raises:
            NarrationError: If synthesis fails or produces no audio
        """


class PollySpeechSynthesizer(SpeechSynthesizer):
    """Amazon Polly speech synthesizer."""

    def __init__(
        self,
        voice_id: str = "Joanna",
        engine: str = "neural",
        output_format: str = "mp3",
        region: str = "ap-southeast-2",
        max_characters: int = POLLY_MAX_CHARACTERS,
        client=None,
    ) -> None:
        """
        Initialize Polly synthesizer.

        Args:
            voice_id: Polly voice identifier
            engine: Polly engine (standard, neural)
            output_format: Audio format (mp3, ogg_vorbis, pcm)
            region: AWS region for Polly
            max_characters: Longest text sent in one Polly call; longer text is
                synthesized in sentence-aligned chunks and the audio joined
            client: Optional preconfigured boto3 Polly client
        """
        self._voice_id = voice_id
        self._engine = engine
        self._output_format = output_format
        self._max_characters = max_characters
        self._client = client or boto3.client("polly", region_name=region)
        if output_format == "ogg_vorbis":
            self.content_type = "audio/ogg"
        elif output_format == "pcm":
            self.content_type = "audio/pcm"

    def _synthesize_sync(self, text: str) -> bytes:
        chunks = split_for_synthesis(text, self._max_characters)
        if len(chunks) > 1:
            logger.info(
                f"{__name__}:synthesize - Text split for Polly",
                extra={"characters": len(text), "chunks": len(chunks)},
            )
        # MP3 and PCM streams concatenate into one playable stream
        return b"".join(
            self._synthesize_chunk(chunk, index) for index, chunk in enumerate(chunks)
        )

    def _synthesize_chunk(self, text: str, index: int) -> bytes:
        response = self._client.synthesize_speech(
            Text=text,
            VoiceId=self._voice_id,
            Engine=self._engine,
            OutputFormat=self._output_format,
        )
        stream = response.get("AudioStream")
        if stream is None:
            raise NarrationError("Speech synthesis returned no audio", details={"chunk": index})
        try:
            audio = stream.read()
        finally:
            stream.close()
        if not audio:
            raise NarrationError("Speech synthesis returned no audio", details={"chunk": index})
        return audio

    async def synthesize(self, text: str) -> bytes:
        if not text.strip():
            raise NarrationError("Cannot narrate empty text")

        try:
            audio = await asyncio.to_thread(self._synthesize_sync, text)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"{__name__}:synthesize - Polly call failed: {type(e).__name__}: {e}")
            raise NarrationError(
                f"Speech synthesis failed: {e}",
                details={"voice_id": self._voice_id},
            ) from e

        logger.info(f"{__name__}:synthesize - Audio generated, bytes={len(audio)}")
        return audio
