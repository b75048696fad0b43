# ============================================================================
# src/medical_router/generation/mistral_client.py
# ============================================================================
"""
Mistral Generation Client

Answers approved questions through the Mistral chat completions API.

- One POST per attempt: [system, user] messages, bearer auth, total timeout
- Retries on HTTP 429 / 5xx, connection errors and timeouts with
  exponential backoff (retry_delay * 2**attempt)
- Never raises to the caller: failures become fixed Spanish messages that
  are shown to the user in place of the answer

Setup:
    export MISTRAL_API_KEY=...        (or put it in .env)
"""

import aiohttp
import asyncio
from typing import Dict, Any, Optional
from datetime import datetime

from ..config import mistral_settings
from ..utils.exceptions import (
    GenerationError,
    GenerationTimeoutError,
    GenerationAuthError,
)
from .base import BaseGenerationClient, BackendType
from .prompts import build_system_prompt, build_user_prompt


# User-facing error messages
ERROR_MISSING_API_KEY = (
    "⚠️ El servicio de generación no está configurado: falta la clave de API de Mistral."
)
ERROR_AUTH = "⚠️ Error de autenticación con el servicio de IA. Verifica la clave de API."
ERROR_RATE_LIMIT = (
    "⚠️ El servicio de IA está saturado en este momento. Intenta de nuevo en unos minutos."
)
ERROR_TIMEOUT = "⚠️ El servicio de IA tardó demasiado en responder. Intenta de nuevo."
ERROR_UNAVAILABLE = "⚠️ El servicio de IA no está disponible en este momento. Intenta más tarde."
ERROR_INVALID_RESPONSE = "⚠️ Se recibió una respuesta inválida del servicio de IA."
ERROR_REQUEST = "⚠️ Error al generar la respuesta (código {status})."
ERROR_UNEXPECTED = "⚠️ Ocurrió un error inesperado al generar la respuesta."


class MistralClient(BaseGenerationClient):
    """
    Mistral chat-completions client.

    Config options (defaults come from mistral_settings):
        api_key: Bearer token
        api_url: Chat completions endpoint
        model: Model name (default: mistral-small-latest)
        temperature: Sampling temperature (default: 0.3)
        max_tokens: Max tokens per answer (default: 4000)
        timeout: Total request timeout in seconds (default: 30)
        max_retries: Attempts before giving up (default: 3)
        retry_delay: Base backoff delay in seconds (default: 5)
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)

        self.api_key = self.config.get('api_key', mistral_settings.MISTRAL_API_KEY)
        self.api_url = self.config.get('api_url', mistral_settings.MISTRAL_API_URL)
        self._model_name = self.config.get('model', mistral_settings.MISTRAL_MODEL)

        # Generation defaults
        self.temperature = self.config.get('temperature', mistral_settings.MISTRAL_TEMPERATURE)
        self.max_tokens = self.config.get('max_tokens', mistral_settings.MISTRAL_MAX_TOKENS)
        self.timeout = self.config.get('timeout', mistral_settings.MISTRAL_TIMEOUT)

        # Retry policy
        self.max_retries = max(1, self.config.get('max_retries', mistral_settings.MISTRAL_MAX_RETRIES))
        self.retry_delay = self.config.get('retry_delay', mistral_settings.MISTRAL_RETRY_DELAY)

        # HTTP session (created lazily, tied to event loop)
        self._session: Optional[aiohttp.ClientSession] = None
        self._session_loop: Optional[asyncio.AbstractEventLoop] = None

        self.logger.info(f"Initialized Mistral client: {self._model_name}")

    @property
    def backend_type(self) -> BackendType:
        return BackendType.MISTRAL

    @property
    def model_name(self) -> str:
        return self._model_name

    @property
    def models_url(self) -> str:
        return self.api_url.replace("/chat/completions", "/models")

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session for current event loop."""
        try:
            current_loop = asyncio.get_running_loop()
        except RuntimeError:
            current_loop = None

        needs_new_session = (
            self._session is None
            or self._session.closed
            or self._session_loop != current_loop
        )

        if needs_new_session:
            if self._session is not None and not self._session.closed:
                await self._session.close()

            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
            self._session_loop = current_loop

        return self._session

    async def close(self):
        """Close HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None
        self._session_loop = None

    def build_payload(
        self,
        question: str,
        domain: str,
        special_command: Optional[str] = None
    ) -> Dict[str, Any]:
        """Chat completions request body."""
        return {
            "model": self._model_name,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "messages": [
                {"role": "system", "content": build_system_prompt(domain, special_command)},
                {"role": "user", "content": build_user_prompt(question, domain, special_command)},
            ],
        }

    async def _post_completion(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Single chat-completions request.

        Raises:
            GenerationAuthError: 401 / 403
            GenerationTimeoutError: Request exceeded the timeout
            GenerationError: Any other failure (retryable for 429 / 5xx /
                connection errors)
        """
        session = await self._get_session()

        try:
            async with session.post(
                self.api_url,
                json=payload,
                headers=self._headers()
            ) as response:
                if response.status == 200:
                    return await response.json(content_type=None)

                error_text = await response.text()
                if response.status in (401, 403):
                    raise GenerationAuthError(
                        f"Mistral rejected the API key ({response.status})",
                        status=response.status
                    )
                raise GenerationError(
                    f"Mistral error ({response.status}): {error_text[:200]}",
                    status=response.status,
                    retryable=response.status == 429 or response.status >= 500
                )

        except asyncio.TimeoutError:
            raise GenerationTimeoutError(
                f"Mistral request timed out after {self.timeout}s"
            )
        except aiohttp.ClientConnectionError as e:
            raise GenerationError(
                f"Cannot connect to Mistral at {self.api_url}: {e}",
                retryable=True
            )
        except ValueError as e:
            raise GenerationError(f"Mistral returned invalid JSON: {e}")

    @staticmethod
    def extract_content(data: Dict[str, Any]) -> str:
        """Answer text from a chat-completions response body."""
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            raise GenerationError("Malformed Mistral response: missing choices[0].message.content")
        if not isinstance(content, str):
            raise GenerationError("Malformed Mistral response: content is not text")
        return content

    def _message_for(self, error: GenerationError) -> str:
        if isinstance(error, GenerationAuthError):
            return ERROR_AUTH
        if isinstance(error, GenerationTimeoutError):
            return ERROR_TIMEOUT
        if error.status == 429:
            return ERROR_RATE_LIMIT
        if error.retryable:
            return ERROR_UNAVAILABLE
        if error.status is not None:
            return ERROR_REQUEST.format(status=error.status)
        return ERROR_INVALID_RESPONSE

    async def generate(
        self,
        question: str,
        domain: str,
        special_command: Optional[str] = None
    ) -> str:
        """
        Generate the answer for an approved question.

        Args:
            question: Original user text
            domain: Classified domain
            special_command: Special command id, "study_mode" or None

        Returns:
            Answer text, or one of the ERROR_* messages
        """
        self.logger.info(f"Generating answer: domain={domain}, special_command={special_command}")

        if not self.api_key:
            self.logger.error("MISTRAL_API_KEY is not configured")
            self._failure_count += 1
            return ERROR_MISSING_API_KEY

        start_time = datetime.now()
        self._request_count += 1

        try:
            payload = self.build_payload(question, domain, special_command)

            for attempt in range(self.max_retries):
                try:
                    data = await self._post_completion(payload)
                    text = self.extract_content(data)

                    generation_time = (datetime.now() - start_time).total_seconds()
                    self._total_generation_time += generation_time
                    self.logger.info(
                        f"Answer generated in {generation_time:.2f}s "
                        f"(attempt {attempt + 1}/{self.max_retries})"
                    )
                    return text

                except GenerationError as e:
                    if e.retryable and attempt < self.max_retries - 1:
                        delay = self.retry_delay * (2 ** attempt)
                        self._retry_count += 1
                        self.logger.warning(
                            f"Mistral attempt {attempt + 1}/{self.max_retries} failed: {e}. "
                            f"Retrying in {delay:.1f}s"
                        )
                        await asyncio.sleep(delay)
                        continue

                    self.logger.error(f"Mistral generation failed: {e}")
                    self._failure_count += 1
                    return self._message_for(e)

        except Exception as e:
            self.logger.exception(f"Unexpected error during generation: {e}")
            self._failure_count += 1
            return ERROR_UNEXPECTED

        self._failure_count += 1
        return ERROR_UNAVAILABLE

    async def health_check(self) -> Dict[str, Any]:
        """
        Check that an API key is configured and the models endpoint answers.
        """
        if not self.api_key:
            return {
                "healthy": False,
                "backend": "mistral",
                "model": self._model_name,
                "details": "MISTRAL_API_KEY is not configured"
            }

        try:
            session = await self._get_session()

            async with session.get(self.models_url, headers=self._headers()) as response:
                if response.status != 200:
                    return {
                        "healthy": False,
                        "backend": "mistral",
                        "model": self._model_name,
                        "details": f"Mistral API returned status {response.status}"
                    }

                return {
                    "healthy": True,
                    "backend": "mistral",
                    "model": self._model_name,
                    "details": "Mistral API reachable"
                }

        except aiohttp.ClientConnectionError:
            return {
                "healthy": False,
                "backend": "mistral",
                "model": self._model_name,
                "details": f"Cannot connect to Mistral at {self.models_url}"
            }
        except Exception as e:
            return {
                "healthy": False,
                "backend": "mistral",
                "model": self._model_name,
                "details": f"Health check failed: {str(e)}"
            }

    def get_statistics(self) -> Dict[str, Any]:
        """Get request statistics."""
        stats = super().get_statistics()
        stats["api_url"] = self.api_url
        stats["max_retries"] = self.max_retries
        return stats
