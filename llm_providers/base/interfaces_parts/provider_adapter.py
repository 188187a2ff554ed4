"""ProviderAdapter Protocol (single-class module).

The operation surface every vendor adapter offers.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Protocol, Sequence, Union, runtime_checkable

from ..models import CompletionResponse, ConnectionTestResult, EmbeddingResponse
from ..utils.messages import MessageLike


@runtime_checkable
class ProviderAdapter(Protocol):
    """Vendor-neutral chat/embedding contract.

    Implementations translate neutral messages to their vendor wire format,
    normalize the answer, and raise only the taxonomy in
    :mod:`llm_providers.base.errors`.
    """

    @property
    def identifier(self) -> str:
        """Stable adapter identifier, e.g. ``"openai"`` or ``"claude"``."""
        ...

    def configure(self, options: Mapping[str, Any]) -> None: ...

    def is_available(self) -> bool: ...

    def supports_feature(self, feature: Any) -> bool: ...

    def chat_completion(self, messages: Sequence[MessageLike], **options: Any) -> CompletionResponse: ...

    def embeddings(self, input: Union[str, Sequence[str]], **options: Any) -> EmbeddingResponse: ...

    def get_available_models(self) -> Dict[str, str]: ...

    def test_connection(self) -> ConnectionTestResult: ...


__all__ = ["ProviderAdapter", "MessageLike"]
