"""Capability interfaces for the generation backends fed by the compiler.

Each backend is a single-method protocol. Concrete implementations are
passed into ``GenerationChain`` at construction; nothing here subclasses
them or knows how they work.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol, Sequence, runtime_checkable

from vl_plan.models import CompileResult, GenerationMode
from vl_plan.params import GenerationParams, build_generation_params


@runtime_checkable
class VisualEncoder(Protocol):
    """Turns a preprocessed pixel buffer into a conditioning vector."""

    def encode(self, pixels: Sequence[float]) -> Sequence[float]:  # pragma: no cover - protocol
        ...


@runtime_checkable
class LatentGenerator(Protocol):
    """Produces a latent from the control document and optional conditioning."""

    def generate(
        self,
        control_json: str,
        params: GenerationParams,
        conditioning: Optional[Sequence[float]] = None,
    ) -> Any:  # pragma: no cover - protocol
        ...


@runtime_checkable
class ImageDecoder(Protocol):
    """Decodes a latent into encoded image or asset bytes."""

    def decode(self, latent: Any) -> bytes:  # pragma: no cover - protocol
        ...


@dataclass(frozen=True)
class GenerationOutput:
    image: bytes
    params: GenerationParams
    conditioned: bool


class GenerationChain:
    """Runs encoder, generator and decoder for one compiled request."""

    def __init__(
        self,
        generator: LatentGenerator,
        decoder: ImageDecoder,
        encoder: Optional[VisualEncoder] = None,
    ) -> None:
        self._generator = generator
        self._decoder = decoder
        self._encoder = encoder

    def run(
        self,
        result: CompileResult,
        *,
        source_pixels: Optional[Sequence[float]] = None,
        params: Optional[GenerationParams] = None,
    ) -> GenerationOutput:
        params = params if params is not None else build_generation_params(result)

        conditioning = None
        edit_mode = result.scene_plan.mode != GenerationMode.TextToImage
        if edit_mode and source_pixels is not None:
            if self._encoder is None:
                raise ValueError("edit modes with a source image need a visual encoder")
            conditioning = self._encoder.encode(source_pixels)

        latent = self._generator.generate(result.json_control, params, conditioning)
        image = self._decoder.decode(latent)
        return GenerationOutput(image=image, params=params, conditioned=conditioning is not None)


__all__ = [
    "GenerationChain",
    "GenerationOutput",
    "ImageDecoder",
    "LatentGenerator",
    "VisualEncoder",
]
