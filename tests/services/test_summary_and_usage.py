import pytest
from langchain_core.messages import AIMessage

from clipnote.llms.llm_gateway import GenerationResult
from clipnote.models.enums import LanguageCode
from clipnote.models.models import TranscriptSegment, Video
from clipnote.repositories.settings_repo import SettingsRepository
from clipnote.repositories.usage_repo import TokenUsageRepository
from clipnote.repositories.user_video_repo import UserVideoRepository
from clipnote.services.summary_service import SummaryGenerator
from clipnote.services.token_tracker import TokenTracker, UsageContext, extract_usage
from clipnote.services.video_pipeline.summary_orchestrator import SummaryOrchestrator, build_summary_input
from clipnote.i18n.prompts import get_summary_prompt


def _message(text="Summary text", input_tokens=120, output_tokens=30):
    return AIMessage(
        content=text,
        usage_metadata={
            "input_tokens": input_tokens,
            "output_tokens": output_tokens,
            "total_tokens": input_tokens + output_tokens,
        },
    )


class FakeTextGateway:
    def __init__(self, text="Summary text"):
        self.text = text
        self.calls = []

    def generate_text(self, prompt, system_prompt=None, model_name=None, temperature=0.2):
        self.calls.append({"prompt": prompt, "system_prompt": system_prompt})
        return GenerationResult(parsed=self.text, raw=_message(self.text), model_name="gpt-4o-mini", provider="openai")


class RecordingSummarizer:
    def __init__(self):
        self.calls = []

    def generate(self, text, language, video_id, user_video_id=None):
        self.calls.append((text, language, video_id, user_video_id))
        return {"summary": "opaque"}


class FixedLanguage:
    def __init__(self, language):
        self.language = language

    def resolve(self, user_id=None):
        return self.language


SEGMENTS = [
    TranscriptSegment(start="00:00:00", end="00:00:02", text="Hello"),
    TranscriptSegment(start="00:00:02", end="00:00:04", text="world"),
]


@pytest.mark.unit
def test_summary_input_joins_title_description_and_transcript():
    video = Video(youtube_id="vid", title="Title", description=None)
    assert build_summary_input(video, SEGMENTS) == "Title\n\nHello world"


@pytest.mark.unit
def test_orchestrator_passes_through_summarizer_result():
    summarizer = RecordingSummarizer()
    orchestrator = SummaryOrchestrator(summarizer, language_resolver=FixedLanguage(LanguageCode.ID))
    video = Video(youtube_id="vid", title="Title", description="Desc")

    result = orchestrator.summarize(video, SEGMENTS, user_video_id="uv-1")

    assert result == {"summary": "opaque"}
    assert summarizer.calls == [("Title\nDesc\nHello world", LanguageCode.ID, "vid", "uv-1")]


@pytest.mark.repo
def test_orchestrator_resolves_language_for_current_user(db):
    SettingsRepository().set_preferred_language("u-7", "id")
    summarizer = RecordingSummarizer()
    orchestrator = SummaryOrchestrator(summarizer, current_user=lambda: "u-7")

    orchestrator.summarize(Video(youtube_id="vid", title="Title"), SEGMENTS)

    assert summarizer.calls[0][1] == LanguageCode.ID


@pytest.mark.unit
def test_extract_usage_reads_usage_metadata_and_defaults_to_zero():
    assert extract_usage(_message(input_tokens=10, output_tokens=5)) == {
        "input_tokens": 10,
        "output_tokens": 5,
        "total_tokens": 15,
    }
    assert extract_usage(None) == {"input_tokens": 0, "output_tokens": 0, "total_tokens": 0}


@pytest.mark.repo
def test_token_tracker_writes_usage_row(db):
    result = GenerationResult(parsed=None, raw=_message(), model_name="gpt-5-nano", provider="openai")
    TokenTracker().track(
        result,
        UsageContext(
            user_id="u-1",
            model="gpt-5-nano",
            provider="openai",
            operation="quick_start_questions",
            video_id="vid",
            user_video_id="uv-1",
            request_duration_ms=42,
        ),
    )

    rows = TokenUsageRepository().list_for_user("u-1")
    assert len(rows) == 1
    row = rows[0]
    assert row["operation"] == "quick_start_questions"
    assert row["input_tokens"] == 120
    assert row["output_tokens"] == 30
    assert row["total_tokens"] == 150
    assert row["request_duration_ms"] == 42
    assert row["video_id"] == "vid"


@pytest.mark.repo
def test_summary_generator_persists_summary_and_tracks_usage(db):
    uv = UserVideoRepository().get_or_create("u-1", "vid")
    gateway = FakeTextGateway(text="  Ringkasan video  ")
    generator = SummaryGenerator(gateway=gateway, current_user=lambda: "u-1")

    result = generator.generate("Title\nDesc\nHello", LanguageCode.ID, "vid", user_video_id=uv.id)

    assert result.summary == "Ringkasan video"
    assert result.language is LanguageCode.ID
    assert gateway.calls[0]["system_prompt"] == get_summary_prompt(LanguageCode.ID)
    assert UserVideoRepository().get_by_id(uv.id).summary == "Ringkasan video"
    (usage,) = TokenUsageRepository().list_for_user("u-1")
    assert usage["operation"] == "summary"
    assert usage["user_video_id"] == uv.id


@pytest.mark.repo
def test_summary_generator_survives_usage_failure(db):
    class BrokenSink:
        def track(self, result, context):
            raise RuntimeError("usage store down")

    generator = SummaryGenerator(gateway=FakeTextGateway(), usage_sink=BrokenSink(), current_user=lambda: "u-1")
    assert generator.generate("text", LanguageCode.EN, "vid").summary == "Summary text"
