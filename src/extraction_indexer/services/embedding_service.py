"""Embedding generation service (provider-agnostic)."""

from __future__ import annotations

from typing import Any, List, Optional, Protocol, Sequence

import openai
from openai import AsyncAzureOpenAI, AsyncOpenAI
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential
from tenacity.wait import wait_base

from extraction_indexer.config import EmbeddingProviderName, EmbeddingSettings
from extraction_indexer.utils.errors import ProviderError
from extraction_indexer.utils.logging import get_logger

logger = get_logger("embedding_service")

# Provider errors worth another attempt; auth and bad requests are not
TRANSIENT_ERRORS = (
    openai.APIConnectionError,
    openai.RateLimitError,
    openai.InternalServerError,
)


class EmbeddingProvider(Protocol):
    """Anything that maps an ordered list of texts to ordered vectors."""

    async def embed(self, texts: Sequence[str]) -> List[List[float]]:
        ...


class EmbeddingService:
    """
    Generate embeddings through the OpenAI SDK (OpenAI direct or Azure OpenAI).

    Construct it once at process start (``from_settings``) and pass it to the
    pipeline. All texts handed to :meth:`embed` go out in one request; the
    response is re-sorted by the index the provider reports and checked for
    count and dimensionality before it is returned.
    """

    def __init__(
        self,
        client: Optional[Any],
        model: str,
        dimensions: int,
        provider: str = EmbeddingProviderName.OPENAI.value,
        max_attempts: int = 5,
        retry_wait: Optional[wait_base] = None,
    ) -> None:
        self._client = client
        self.model = model
        self.dimensions = dimensions
        self.provider = provider
        self._max_attempts = max(1, max_attempts)
        self._retry_wait = retry_wait or wait_exponential(multiplier=1, min=1, max=30)

    @classmethod
    def from_settings(cls, settings: EmbeddingSettings) -> "EmbeddingService":
        """
        Build the service and its SDK client from the embedding settings.

        Missing credentials do not fail here: the service is still created and
        every :meth:`embed` call raises ``ProviderError``, so the caller can
        treat it as a per-document failure.
        """
        model = settings.resolved_model_name
        client: Optional[Any] = None

        if not settings.is_configured:
            logger.warning(
                f"Embedding provider '{settings.embedding_provider.value}' has no credentials; "
                "embedding calls will fail"
            )
        elif settings.embedding_provider == EmbeddingProviderName.OPENAI:
            client = AsyncOpenAI(
                api_key=settings.openai_api_key,
                base_url=settings.openai_base_url,
                timeout=settings.embedding_timeout,
                max_retries=0,
            )
        elif settings.embedding_provider == EmbeddingProviderName.AZURE:
            client = AsyncAzureOpenAI(
                api_key=settings.azure_openai_api_key,
                azure_endpoint=settings.azure_openai_endpoint,
                api_version=settings.azure_openai_api_version,
                timeout=settings.embedding_timeout,
                max_retries=0,
            )

        return cls(
            client=client,
            model=model,
            dimensions=settings.embedding_dimension,
            provider=settings.embedding_provider.value,
            max_attempts=settings.embedding_max_retries,
        )

    async def _create(self, inputs: List[str]) -> Any:
        """Send one embeddings request, retrying transient failures."""
        async for attempt in AsyncRetrying(
            reraise=True,
            stop=stop_after_attempt(self._max_attempts),
            wait=self._retry_wait,
            retry=retry_if_exception_type(TRANSIENT_ERRORS),
        ):
            with attempt:
                return await self._client.embeddings.create(
                    model=self.model,
                    input=inputs,
                    dimensions=self.dimensions,
                )
        raise ProviderError("Embedding retries exhausted", model=self.model)

    async def embed(self, texts: Sequence[str]) -> List[List[float]]:
        """
        Embed *texts* in a single batch.

        Returns:
            One vector per input, in input order

        Raises:
            ProviderError: missing credentials, provider/transport failure, or
                a response that does not line up with the request
        """
        inputs = list(texts)
        if not inputs:
            return []

        if self._client is None:
            raise ProviderError(
                f"Embedding provider '{self.provider}' is not configured (missing credentials)",
                model=self.model,
            )

        try:
            response = await self._create(inputs)
        except openai.OpenAIError as e:
            raise ProviderError(f"Embedding request failed: {e}", model=self.model) from e

        data = list(getattr(response, "data", None) or [])
        if len(data) != len(inputs):
            raise ProviderError(
                "Embedding response size mismatch",
                model=self.model,
                details={"expected": len(inputs), "got": len(data)},
            )

        data.sort(key=lambda item: item.index)
        indices = [item.index for item in data]
        if indices != list(range(len(inputs))):
            raise ProviderError(
                "Embedding response indices do not match the request",
                model=self.model,
                details={"indices": indices},
            )

        vectors: List[List[float]] = []
        for item in data:
            vector = list(item.embedding or [])
            if len(vector) != self.dimensions:
                raise ProviderError(
                    "Embedding dimension mismatch",
                    model=self.model,
                    details={
                        "index": item.index,
                        "expected_dimension": self.dimensions,
                        "actual_dimension": len(vector),
                    },
                )
            vectors.append(vector)

        logger.info(
            f"Embeddings generated: provider={self.provider}, model={self.model}, "
            f"count={len(vectors)}, dimension={self.dimensions}"
        )
        return vectors
