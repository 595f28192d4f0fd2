"""Application tests for the advisory service and its adapters."""

import json
from types import SimpleNamespace

import pytest

from warehouse.advisory import get_advisor, reset_advisor, set_advisor
from warehouse.advisory.fake_adapter import FakeAdvisor
from warehouse.advisory.openai_adapter import OpenAIAdvisor
from warehouse.advisory.port import (
    CHAT_EMPTY_REPLY,
    CHAT_FALLBACK,
    DEFAULT_LOCATION,
    DEFAULT_PACKAGING,
    Insight,
)
from warehouse.advisory.service import AdvisoryService

INVENTORY = [
    {"id": "1", "sku": "TECH-001", "name": "Wireless Ergonomic Mouse", "category": "Electronics",
     "quantity": 45, "min_stock_level": 20, "location": "A-12-01"},
    {"id": "2", "sku": "FUR-105", "name": "Mesh Office Chair", "category": "Furniture",
     "quantity": 8, "min_stock_level": 10, "location": "B-05-02"},
]


class _Completions:
    """Stands in for ``client.chat.completions`` and records each request."""

    def __init__(self, reply):
        self.reply = reply
        self.requests = []

    async def create(self, **kwargs):
        self.requests.append(kwargs)
        message = SimpleNamespace(content=self.reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _openai_advisor(reply):
    completions = _Completions(reply)
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return OpenAIAdvisor(client=client, model="test-model"), completions


@pytest.fixture()
def advisor():
    return FakeAdvisor()


@pytest.fixture()
def service(advisor):
    return AdvisoryService(advisor=advisor, timeout=0.5)


class TestFakeAdvisorAnswers:
    @pytest.mark.asyncio
    async def test_location_follows_category_zone(self, service):
        context = {"locations": ["B-01-01"]}
        assert await service.suggest_location({"name": "Desk", "category": "Furniture"}, context) == "B-02-01"

    @pytest.mark.asyncio
    async def test_packaging_by_unit_count(self, service):
        assert await service.suggest_packaging([{"name": "Mouse", "quantity": 5}]) == "Medium Box (14x14x14 in)"

    @pytest.mark.asyncio
    async def test_insights_flag_low_stock(self, service):
        insights = await service.summarize_insights(INVENTORY)
        assert insights[0] == Insight(
            kind="warning", message="Mesh Office Chair (FUR-105) is at 8 units.", actionable=True
        )
        assert insights[-1].kind == "suggestion"

    @pytest.mark.asyncio
    async def test_chat_answers_from_inventory(self, service):
        reply = await service.chat(INVENTORY, "Where is the mesh office chair?")
        assert reply == "Mesh Office Chair (FUR-105): 8 units at B-05-02."


class TestFallbacks:
    @pytest.mark.asyncio
    async def test_failure_falls_back_for_every_capability(self, service, advisor):
        advisor.configure(should_succeed=False)
        assert await service.suggest_location({"name": "Desk"}) == DEFAULT_LOCATION
        assert await service.suggest_packaging([]) == DEFAULT_PACKAGING
        assert await service.summarize_insights(INVENTORY) == []
        assert await service.identify_item("aGVsbG8=") == {}
        assert await service.chat(INVENTORY, "hello") == CHAT_FALLBACK

    @pytest.mark.asyncio
    async def test_timeout_falls_back(self, advisor):
        advisor.configure(delay=1.0)
        service = AdvisoryService(advisor=advisor, timeout=0.01)
        assert await service.suggest_location({"name": "Desk"}) == DEFAULT_LOCATION

    @pytest.mark.asyncio
    async def test_unknown_adapter_falls_back(self, monkeypatch):
        monkeypatch.setenv("ADVISOR_ADAPTER", "oracle")
        service = AdvisoryService(timeout=1)
        assert await service.suggest_location({"name": "Desk"}, {}) == DEFAULT_LOCATION
        assert await service.chat(INVENTORY, "hello") == CHAT_FALLBACK

    @pytest.mark.asyncio
    async def test_openai_without_credentials_falls_back(self, monkeypatch):
        monkeypatch.setenv("ADVISOR_ADAPTER", "openai")
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        service = AdvisoryService(timeout=1)
        assert await service.suggest_location({"name": "Desk"}, {}) == DEFAULT_LOCATION
        assert await service.suggest_packaging([]) == DEFAULT_PACKAGING
        assert await service.summarize_insights(INVENTORY) == []

    @pytest.mark.asyncio
    async def test_empty_chat_reply_is_replaced(self):
        advisor, _ = _openai_advisor("   ")
        assert await AdvisoryService(advisor=advisor).chat(INVENTORY, "hi") == CHAT_EMPTY_REPLY


class TestOpenAIAdvisor:
    @pytest.mark.asyncio
    async def test_location_reply_is_normalized(self):
        advisor, completions = _openai_advisor('Put it in "C-05-01".')
        location = await AdvisoryService(advisor=advisor).suggest_location({"name": "Paper"}, {"categories": []})
        assert location == "C-05-01"
        assert completions.requests[0]["model"] == "test-model"

    @pytest.mark.asyncio
    async def test_insights_request_json_object(self):
        reply = json.dumps({"insights": [{"type": "success", "message": "Stock is healthy", "actionable": False}]})
        advisor, completions = _openai_advisor(reply)
        insights = await AdvisoryService(advisor=advisor).summarize_insights(INVENTORY)
        assert insights == [Insight(kind="success", message="Stock is healthy")]
        assert completions.requests[0]["response_format"] == {"type": "json_object"}

    @pytest.mark.asyncio
    async def test_malformed_insights_fall_back(self):
        advisor, _ = _openai_advisor("not json")
        assert await AdvisoryService(advisor=advisor).summarize_insights(INVENTORY) == []

    @pytest.mark.asyncio
    async def test_identify_sends_image_as_data_url(self):
        advisor, completions = _openai_advisor(json.dumps({"name": "Stapler", "category": "Office Supplies"}))
        draft = await AdvisoryService(advisor=advisor).identify_item("aGVsbG8=")
        assert draft == {"name": "Stapler", "category": "Office Supplies"}
        content = completions.requests[0]["messages"][0]["content"]
        assert content[1]["image_url"]["url"] == "data:image/jpeg;base64,aGVsbG8="

    @pytest.mark.asyncio
    async def test_chat_carries_history_and_context(self):
        advisor, completions = _openai_advisor("Eight chairs.")
        history = [{"role": "user", "content": "hi"}, {"role": "assistant", "content": "Hello!"}]
        reply = await AdvisoryService(advisor=advisor).chat(INVENTORY, "How many chairs?", history)
        assert reply == "Eight chairs."
        messages = completions.requests[0]["messages"]
        assert messages[0]["role"] == "system"
        assert "Mesh Office Chair (ID: FUR-105): 8 in stock (Loc: B-05-02)" in messages[0]["content"]
        assert [m["content"] for m in messages[1:]] == ["hi", "Hello!", "How many chairs?"]


class TestFactory:
    def test_default_is_fake(self):
        assert isinstance(get_advisor(), FakeAdvisor)

    def test_set_advisor_overrides(self):
        custom = FakeAdvisor()
        set_advisor(custom)
        assert get_advisor() is custom
        reset_advisor()
        assert get_advisor() is not custom

    def test_unknown_adapter_is_rejected(self, monkeypatch):
        reset_advisor()
        monkeypatch.setenv("ADVISOR_ADAPTER", "oracle")
        with pytest.raises(ValueError):
            get_advisor()
