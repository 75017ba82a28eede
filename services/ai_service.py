"""
Сервис подсказок подзадач через OpenAI API
"""

import json
import logging
from typing import List, Optional

from openai import AsyncOpenAI

from config import AIConfig

logger = logging.getLogger(__name__)

SUGGEST_SUBTASKS_PROMPT = (
    'Generate 3 to 5 clear, actionable subtasks for the following task: "{task_name}" '
    'in the category "{category_name}". Provide only the subtask names as a simple list. '
    'Respond with a JSON object of the form {{"subtasks": ["..."]}}.'
)

class AIService:
    """Генерация подзадач для задачи; при любой ошибке - пустой список"""

    def __init__(self, ai_config: AIConfig, client=None):
        self.config = ai_config
        self.client = client
        self.enabled = client is not None or ai_config.enabled

        if self.client is None and self.enabled:
            try:
                self.client = AsyncOpenAI(
                    api_key=ai_config.openai_api_key,
                    timeout=ai_config.request_timeout
                )
                logger.info("🤖 AI сервис инициализирован")
            except Exception as e:
                logger.error(f"❌ Ошибка инициализации AI: {e}")
                self.enabled = False
        elif not self.enabled:
            logger.warning("⚠️ AI сервис отключен (нет OPENAI_API_KEY)")

    async def suggest_subtasks(self, task_name: str, category_name: str) -> List[str]:
        """Предложение подзадач для задачи в категории"""
        if not self.enabled:
            return []

        try:
            prompt = SUGGEST_SUBTASKS_PROMPT.format(task_name=task_name, category_name=category_name)
            response = await self.client.chat.completions.create(
                model=self.config.openai_model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=self.config.openai_max_tokens,
                temperature=0.7,
                response_format={"type": "json_object"}
            )

            content = response.choices[0].message.content or '{"subtasks": []}'
            suggestions = self._parse_suggestions(content)
            logger.info(f"🤖 Получено {len(suggestions)} подсказок для задачи '{task_name}'")
            return suggestions

        except Exception as e:
            logger.error(f"❌ Ошибка AI подсказок подзадач: {e}")
            return []

    def _parse_suggestions(self, content: str) -> List[str]:
        data = json.loads(content)
        items: Optional[list] = data.get("subtasks") if isinstance(data, dict) else None
        if not isinstance(items, list):
            return []
        names = [item.strip() for item in items if isinstance(item, str) and item.strip()]
        return names[:self.config.max_suggestions]
