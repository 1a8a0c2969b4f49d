"""
Test suite for speech synthesis and narration storage.

boto3 clients are replaced with MagicMocks; local storage writes to tmp_path.

System role: Verification of the speech boundary
"""

import io
import uuid
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from studycast.boundary.speech import LocalAudioStorage, PollySpeechSynthesizer, S3AudioStorage
from studycast.boundary.speech.speech_synthesizer import split_for_synthesis
from studycast.core.exceptions import ErrorKind, NarrationError, StorageError


def client_error(operation: str) -> ClientError:
    return ClientError({"Error": {"Code": "ServiceUnavailable", "Message": "try later"}}, operation)


@pytest.fixture
def polly_client() -> MagicMock:
    """Provide mock Polly client returning a small audio stream."""
    client = MagicMock()
    client.synthesize_speech.return_value = {"AudioStream": io.BytesIO(b"ID3audio")}
    return client


class TestPollySpeechSynthesizer:
    """Test suite for PollySpeechSynthesizer."""

    @pytest.mark.asyncio
    async def test_should_return_audio_bytes(self, polly_client: MagicMock) -> None:
        # Arrange
        synthesizer = PollySpeechSynthesizer(voice_id="Matthew", client=polly_client)

        # Act
        audio = await synthesizer.synthesize("Plants make sugar.")

        # Assert
        assert audio == b"ID3audio"
        polly_client.synthesize_speech.assert_called_once_with(
            Text="Plants make sugar.",
            VoiceId="Matthew",
            Engine="neural",
            OutputFormat="mp3",
        )
        assert synthesizer.content_type == "audio/mpeg"

    @pytest.mark.asyncio
    async def test_long_summary_should_be_narrated_in_full(self, polly_client: MagicMock) -> None:
        # Arrange: about 4600 characters, over the single-call limit
        polly_client.synthesize_speech.side_effect = lambda **kwargs: {
            "AudioStream": io.BytesIO(b"ID3chunk")
        }
        summary = " ".join(f"Sentence number {i} explains one idea." for i in range(120))
        synthesizer = PollySpeechSynthesizer(client=polly_client)

        # Act
        audio = await synthesizer.synthesize(summary)

        # Assert
        sent = [call.kwargs["Text"] for call in polly_client.synthesize_speech.call_args_list]
        assert len(sent) == 2
        assert all(len(text) <= 3000 for text in sent)
        assert " ".join(sent) == summary
        assert all(text.endswith(".") for text in sent)
        assert audio == b"ID3chunk" * 2

    @pytest.mark.asyncio
    async def test_empty_chunk_should_fail_whole_narration(self, polly_client: MagicMock) -> None:
        streams = iter([b"ID3first", b""])
        polly_client.synthesize_speech.side_effect = lambda **kwargs: {
            "AudioStream": io.BytesIO(next(streams))
        }
        synthesizer = PollySpeechSynthesizer(max_characters=20, client=polly_client)

        with pytest.raises(NarrationError):
            await synthesizer.synthesize("First sentence here. Second sentence here.")

    @pytest.mark.asyncio
    async def test_client_error_should_raise_narration_error(self, polly_client: MagicMock) -> None:
        polly_client.synthesize_speech.side_effect = client_error("SynthesizeSpeech")
        synthesizer = PollySpeechSynthesizer(client=polly_client)

        with pytest.raises(NarrationError) as exc_info:
            await synthesizer.synthesize("text")

        assert exc_info.value.kind == ErrorKind.NARRATION_FAILED

    @pytest.mark.asyncio
    async def test_empty_audio_should_raise(self, polly_client: MagicMock) -> None:
        polly_client.synthesize_speech.return_value = {"AudioStream": io.BytesIO(b"")}

        with pytest.raises(NarrationError):
            await PollySpeechSynthesizer(client=polly_client).synthesize("text")

    @pytest.mark.asyncio
    async def test_blank_text_should_raise_without_calling_polly(self, polly_client: MagicMock) -> None:
        with pytest.raises(NarrationError):
            await PollySpeechSynthesizer(client=polly_client).synthesize("  ")

        polly_client.synthesize_speech.assert_not_called()


class TestS3AudioStorage:
    """Test suite for S3AudioStorage."""

    @pytest.mark.asyncio
    async def test_save_should_upload_and_return_s3_ref(self) -> None:
        # Arrange
        s3 = MagicMock()
        storage = S3AudioStorage(bucket="study-audio", prefix="narrations", client=s3)
        summary_id = uuid.uuid4()

        # Act
        ref = await storage.save(summary_id, b"mp3", "audio/mpeg")

        # Assert
        assert ref == f"s3://study-audio/narrations/{summary_id}.mp3"
        s3.put_object.assert_called_once_with(
            Bucket="study-audio",
            Key=f"narrations/{summary_id}.mp3",
            Body=b"mp3",
            ContentType="audio/mpeg",
        )

    @pytest.mark.asyncio
    async def test_upload_failure_should_raise_storage_error(self) -> None:
        s3 = MagicMock()
        s3.put_object.side_effect = client_error("PutObject")
        storage = S3AudioStorage(bucket="study-audio", client=s3)

        with pytest.raises(StorageError):
            await storage.save(uuid.uuid4(), b"mp3", "audio/mpeg")

    def test_playback_url_should_presign_object_key(self) -> None:
        # Arrange
        s3 = MagicMock()
        s3.generate_presigned_url.return_value = "https://signed.example/a.mp3"
        storage = S3AudioStorage(bucket="study-audio", client=s3, url_expiry=600)

        # Act
        url = storage.playback_url("s3://study-audio/narrations/a.mp3")

        # Assert
        assert url == "https://signed.example/a.mp3"
        s3.generate_presigned_url.assert_called_once_with(
            ClientMethod="get_object",
            Params={"Bucket": "study-audio", "Key": "narrations/a.mp3"},
            ExpiresIn=600,
        )


class TestLocalAudioStorage:
    """Test suite for LocalAudioStorage."""

    @pytest.mark.asyncio
    async def test_save_should_write_file(self, tmp_path) -> None:
        # Arrange
        storage = LocalAudioStorage(tmp_path / "audio")
        summary_id = uuid.uuid4()

        # Act
        ref = await storage.save(summary_id, b"mp3-bytes", "audio/mpeg")

        # Assert
        assert ref.endswith(f"{summary_id}.mp3")
        assert (tmp_path / "audio" / f"{summary_id}.mp3").read_bytes() == b"mp3-bytes"
        assert storage.playback_url(ref).startswith("file://")


class TestSplitForSynthesis:
    """Test sentence-aligned chunking of narration text."""

    def test_short_text_is_single_chunk(self) -> None:
        assert split_for_synthesis("One. Two.", max_characters=100) == ["One. Two."]

    def test_chunks_break_between_sentences(self) -> None:
        chunks = split_for_synthesis("Alpha beta. Gamma delta. Epsilon.", max_characters=24)

        assert chunks == ["Alpha beta. Gamma delta.", "Epsilon."]

    def test_oversized_sentence_breaks_at_space(self) -> None:
        chunks = split_for_synthesis("aaaa bbbb cccc dddd", max_characters=10)

        assert chunks == ["aaaa bbbb", "cccc dddd"]
        assert all(len(chunk) <= 10 for chunk in chunks)

    def test_unbroken_word_is_hard_split(self) -> None:
        assert split_for_synthesis("x" * 25, max_characters=10) == ["x" * 10, "x" * 10, "x" * 5]
