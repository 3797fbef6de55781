import logging
import os

import openai

from utils.constants import LLM_TEMPERATURE, OPENAI_MODEL, PREDICTION_ASSETS, SUMMARY_ASSETS

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are an experienced financial expert."


def _mock_enabled() -> bool:
    return os.environ.get("LLM_MOCK", "").strip().lower() in ("1", "true", "yes")


class LLMService:
    """
    Narrative summaries from an OpenAI chat model.
    - generate_summary: outlook per asset class for an investment period and loss tolerance
    - generate_predictions: one-line short-term prediction per asset
    Set LLM_MOCK=1 to return a canned summary without calling the API.
    """

    def __init__(self, api_key=None, model=OPENAI_MODEL, client=None):
        self.api_key = api_key or os.environ.get("OPENAI_API_KEY")
        self.model = model
        self._client = client

    @property
    def client(self):
        if self._client is None:
            if not self.api_key:
                raise ValueError("OPENAI_API_KEY is not set")
            self._client = openai.OpenAI(api_key=self.api_key)
        return self._client

    @staticmethod
    def build_summary_prompt(investment_period, max_loss_rate):
        lines = "\n".join(f"- {a}" for a in SUMMARY_ASSETS)
        return (
            "You are an economic analyst. Assuming the user can tolerate a loss of "
            f"'{max_loss_rate}' over '{investment_period}', summarize in 1-2 lines each "
            "the expected volatility and investment outlook of the following assets:\n\n"
            f"{lines}\n\n"
            "Keep it friendly but concise. Emoji are allowed."
        )

    @staticmethod
    def mock_summary(investment_period, max_loss_rate):
        return (
            f"Outlook summary ({investment_period}, max loss tolerance: {max_loss_rate})\n\n"
            "- Bonds: gentle upside as rates may ease\n"
            "- Gold: sideways as inflation cools\n"
            "- Nasdaq: rebound led by tech\n"
            "- US large-cap value stocks: steady, dividend-led\n"
            "- Bitcoin: possible pullback after a short-term top\n"
            "- Seoul real estate: soft while rate burden persists"
        )

    def _complete(self, messages):
        response = self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            temperature=LLM_TEMPERATURE,
        )
        choices = response.choices
        if len(choices) == 0:
            return None
        content = choices[0].message.content
        return content.strip() if content else None

    def generate_summary(self, investment_period, max_loss_rate):
        if _mock_enabled():
            return {'summary': self.mock_summary(investment_period, max_loss_rate)}
        try:
            summary = self._complete([
                {'role': 'system', 'content': SYSTEM_PROMPT},
                {'role': 'user', 'content': self.build_summary_prompt(investment_period, max_loss_rate)},
            ])
            return {'summary': summary or 'summary_generation_failed (empty response)'}
        except ValueError as e:
            logger.error(f"LLM summary unavailable: {e}")
            return {'error': 'openai_api_key_not_configured', 'status': 500}
        except openai.OpenAIError as e:
            logger.error(f"OpenAI API error: {e}", exc_info=True)
            return {'error': f"llm_summary_failed: {e}", 'status': 502}

    @staticmethod
    def parse_predictions(text, assets=PREDICTION_ASSETS):
        """Pick the first line mentioning each asset; fall back to a placeholder."""
        lines = [ln.strip(" -*•\t") for ln in (text or "").splitlines() if ln.strip()]
        predictions = []
        for asset in assets:
            match = next((ln for ln in lines if asset.lower() in ln.lower()), None)
            predictions.append({
                'asset': asset,
                'prediction': match or f"No prediction available for {asset}",
            })
        return predictions

    def generate_predictions(self, assets=PREDICTION_ASSETS):
        prompt = (
            "Give a 1-2 line short-term prediction for each of the following assets, "
            f"one asset per line, starting with the asset name: {', '.join(assets)}"
        )
        if _mock_enabled():
            return {'predictions': self.parse_predictions("", assets)}
        try:
            text = self._complete([{'role': 'user', 'content': prompt}])
            return {'predictions': self.parse_predictions(text, assets)}
        except ValueError as e:
            logger.error(f"LLM predictions unavailable: {e}")
            return {'error': 'openai_api_key_not_configured', 'status': 500}
        except openai.OpenAIError as e:
            logger.error(f"OpenAI API error: {e}", exc_info=True)
            return {'error': f"llm_predictions_failed: {e}", 'status': 502}
