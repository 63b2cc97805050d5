"""AI insight gateways.

Two interchangeable backends share one contract:

1. `get_insights(text)` returns ``{"mood", "insights", "suggestions"}`` for a
   single journal entry.
2. `get_recommendations(texts)` returns ``{"topics", "prompts"}`` built from a
   user's previous entries.
3. `generate_reply(text)` returns free-form generated text.

`OpenAIGateway` asks a chat model for JSON directly.  `HuggingFaceGateway`
combines hosted classification, summarization and text-generation models and
fills the rest of the contract with fixed suggestions.  Which one is used is
decided by the ``INSIGHT_BACKEND`` setting through `create_gateway`.

Every upstream failure is raised as `GatewayError`; nothing is retried.
"""

from __future__ import annotations

import json
import logging
from typing import List

import requests
from openai import OpenAI, OpenAIError

from app.errors import GatewayError

logger = logging.getLogger(__name__)

DEFAULT_SUGGESTIONS = [
    "Consider expanding on your thoughts",
    "Try writing about related experiences",
    "Reflect on how this connects to your goals",
]

DEFAULT_PROMPTS = [
    "What emotions came up for you today?",
    "Describe a moment that challenged you",
    "What are you looking forward to?",
]


def _string_list(value) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if str(item).strip()]


class InsightGateway:
    """Capability interface shared by every AI backend."""

    name = 'base'

    def get_insights(self, text: str) -> dict:
        raise NotImplementedError

    def get_recommendations(self, texts: List[str]) -> dict:
        raise NotImplementedError

    def generate_reply(self, text: str) -> str:
        raise NotImplementedError


# ----------------------------------------------------------------------------------
# OpenAI
# ----------------------------------------------------------------------------------

INSIGHTS_SYSTEM_PROMPT = (
    "You are an empathetic journal assistant. Analyze the journal entry and provide "
    "insights, suggestions, and mood analysis. Return the response in JSON format with "
    "the following structure: { mood: string, insights: string[], suggestions: string[] }"
)

RECOMMENDATIONS_SYSTEM_PROMPT = (
    "Based on the user's previous journal entries, suggest topics or prompts for their "
    "next entry. Return response as JSON with format: { topics: string[], prompts: string[] }"
)

CHAT_SYSTEM_PROMPT = "You are a supportive journaling companion. Reply briefly."


class OpenAIGateway(InsightGateway):
    name = 'openai'

    def __init__(self, api_key=None, model='gpt-4o', timeout=30.0, client=None):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._client = client

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            if not self.api_key:
                raise GatewayError('OpenAI API key is not configured')
            self._client = OpenAI(api_key=self.api_key, timeout=self.timeout, max_retries=0)
        return self._client

    def _complete(self, system_prompt: str, user_content: str, json_mode: bool = True) -> str:
        kwargs = {}
        if json_mode:
            kwargs['response_format'] = {"type": "json_object"}
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_content},
            ],
            **kwargs,
        )
        return (response.choices[0].message.content or '').strip()

    def _complete_json(self, system_prompt: str, user_content: str) -> dict:
        raw = self._complete(system_prompt, user_content)
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.error("Failed to parse OpenAI JSON: %s", raw)
            raise ValueError("Invalid JSON from OpenAI") from exc
        if not isinstance(data, dict):
            raise ValueError("Invalid JSON from OpenAI")
        return data

    def get_insights(self, text):
        try:
            data = self._complete_json(INSIGHTS_SYSTEM_PROMPT, text)
        except (OpenAIError, ValueError) as exc:
            raise GatewayError(f'Failed to get journal insights: {exc}') from exc
        return {
            'mood': str(data.get('mood') or 'neutral'),
            'insights': _string_list(data.get('insights')),
            'suggestions': _string_list(data.get('suggestions')),
        }

    def get_recommendations(self, texts):
        try:
            data = self._complete_json(RECOMMENDATIONS_SYSTEM_PROMPT, json.dumps(texts))
        except (OpenAIError, ValueError) as exc:
            raise GatewayError(f'Failed to get recommendations: {exc}') from exc
        return {
            'topics': _string_list(data.get('topics')),
            'prompts': _string_list(data.get('prompts')),
        }

    def generate_reply(self, text):
        try:
            return self._complete(CHAT_SYSTEM_PROMPT, text, json_mode=False)
        except OpenAIError as exc:
            raise GatewayError(f'Failed to generate reply: {exc}') from exc


# ----------------------------------------------------------------------------------
# Hugging Face hosted inference
# ----------------------------------------------------------------------------------

class HuggingFaceGateway(InsightGateway):
    name = 'huggingface'

    def __init__(self, api_key=None, base_url='https://router.huggingface.co/hf-inference/models',
                 emotion_model='SamLowe/roberta-base-go_emotions',
                 summary_model='facebook/bart-large-cnn',
                 generation_model='gpt2', timeout=30.0, session=None):
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.emotion_model = emotion_model
        self.summary_model = summary_model
        self.generation_model = generation_model
        self.timeout = timeout
        self.session = session or requests.Session()

    def _infer(self, model: str, payload: dict):
        headers = {}
        if self.api_key:
            headers['Authorization'] = f'Bearer {self.api_key}'
        resp = self.session.post(
            f'{self.base_url}/{model}', headers=headers, json=payload, timeout=self.timeout
        )
        resp.raise_for_status()
        return resp.json()

    @staticmethod
    def _top_label(data) -> str:
        # Classification returns [[{label, score}, ...]] or [{label, score}, ...]
        if isinstance(data, list) and data and isinstance(data[0], list):
            data = data[0]
        if not isinstance(data, list) or not data:
            return 'neutral'
        best = max(data, key=lambda item: item.get('score', 0.0))
        return best.get('label') or 'neutral'

    @staticmethod
    def _first_field(data, key: str) -> str:
        if isinstance(data, list) and data:
            data = data[0]
        if not isinstance(data, dict) or key not in data:
            raise ValueError(f'Unexpected response shape, missing {key}')
        return str(data[key])

    def _generate(self, prompt: str) -> str:
        data = self._infer(self.generation_model, {
            "inputs": prompt,
            "parameters": {"max_new_tokens": 100, "return_full_text": False},
        })
        return self._first_field(data, 'generated_text')

    def get_insights(self, text):
        try:
            mood = self._top_label(self._infer(self.emotion_model, {"inputs": text}))
            summary = self._first_field(
                self._infer(self.summary_model, {
                    "inputs": text,
                    "parameters": {"max_length": 100, "min_length": 30},
                }),
                'summary_text'
            )
        except (requests.RequestException, ValueError) as exc:
            raise GatewayError(f'Failed to get journal insights: {exc}') from exc

        insights = [s.strip() for s in summary.split('.') if s.strip()]
        return {
            'mood': mood,
            'insights': insights,
            'suggestions': list(DEFAULT_SUGGESTIONS),
        }

    def get_recommendations(self, texts):
        context = ' '.join(texts)
        prompt = f"Based on these journal entries, suggest writing topics:\n{context}\nTopics:"
        try:
            generated = self._generate(prompt)
        except (requests.RequestException, ValueError) as exc:
            raise GatewayError(f'Failed to get recommendations: {exc}') from exc

        topics = [line.strip() for line in generated.split('\n') if line.strip()]
        return {
            'topics': topics[:3],
            'prompts': list(DEFAULT_PROMPTS),
        }

    def generate_reply(self, text):
        try:
            return self._generate(text)
        except (requests.RequestException, ValueError) as exc:
            raise GatewayError(f'Failed to generate reply: {exc}') from exc


def create_gateway(config) -> InsightGateway:
    """Build the gateway named by ``INSIGHT_BACKEND``."""
    backend = (config.get('INSIGHT_BACKEND') or 'huggingface').lower()
    timeout = config.get('INSIGHT_TIMEOUT', 30.0)

    if backend == 'openai':
        return OpenAIGateway(
            api_key=config.get('OPENAI_API_KEY'),
            model=config.get('OPENAI_MODEL', 'gpt-4o'),
            timeout=timeout,
        )
    if backend == 'huggingface':
        return HuggingFaceGateway(
            api_key=config.get('HUGGINGFACE_API_KEY'),
            base_url=config.get('HUGGINGFACE_API_URL', 'https://router.huggingface.co/hf-inference/models'),
            emotion_model=config.get('HUGGINGFACE_EMOTION_MODEL', 'SamLowe/roberta-base-go_emotions'),
            summary_model=config.get('HUGGINGFACE_SUMMARY_MODEL', 'facebook/bart-large-cnn'),
            generation_model=config.get('HUGGINGFACE_GENERATION_MODEL', 'gpt2'),
            timeout=timeout,
        )
    raise ValueError(f"Unknown INSIGHT_BACKEND '{backend}'")
