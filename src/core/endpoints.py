"""Registro declarativo de endpoints.

Cada entrada fija (método HTTP, plantilla de path, schema del body). Los
métodos de `ArariaClient` y el comando `araria call` resuelven el endpoint por
nombre en esta tabla; no hay lógica por endpoint fuera de aquí.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from pydantic import BaseModel

from core.domain.models import (
    BackgroundRemovalRequest,
    ChatRequest,
    DecorImageRequest,
    DecorPrimeWallsRequest,
    FashionModelPromptRequest,
    FashionModelRequest,
    FashionTryonRequest,
    FashionVideoRequest,
    ImageGenerateRequest,
    ImageTaskRequest,
    NuvemshopConnectDto,
    PromptGenerateRequest,
    UpscaleRequest,
    VisionImageToTextRequest,
)

_FORMATTER = string.Formatter()


@dataclass(frozen=True)
class EndpointDescriptor:
    """Un endpoint remoto: verbo, plantilla de path y schema del body."""

    name: str
    method: str
    path: str
    schema: type[BaseModel] | None = None
    multipart: bool = False
    summary: str = ""

    @property
    def path_params(self) -> tuple[str, ...]:
        return tuple(field for _, field, _, _ in _FORMATTER.parse(self.path) if field)

    def render_path(self, **params: Any) -> str:
        """Sustituye los parámetros de la plantilla (URL-encoded).

        Lanza `ValueError` si falta alguno o si sobran.
        """

        expected = set(self.path_params)
        missing = expected - params.keys()
        if missing:
            raise ValueError(f"{self.name}: missing path parameter(s): {', '.join(sorted(missing))}")
        unexpected = params.keys() - expected
        if unexpected:
            raise ValueError(f"{self.name}: unexpected path parameter(s): {', '.join(sorted(unexpected))}")
        return self.path.format(**{k: quote(str(v), safe="") for k, v in params.items()})


ENDPOINTS: tuple[EndpointDescriptor, ...] = (
    # Imagen
    EndpointDescriptor("img_generate", "POST", "img/generate", ImageGenerateRequest, summary="Generate image"),
    EndpointDescriptor("upscale_image", "POST", "img/upscale", UpscaleRequest, summary="Upscale an image"),
    EndpointDescriptor(
        "remove_background", "POST", "img/bkg-removal", BackgroundRemovalRequest, summary="Remove image background"
    ),
    EndpointDescriptor(
        "generate_decor_prime_walls", "POST", "img/prime-walls", DecorPrimeWallsRequest, summary="Generate prime walls"
    ),
    EndpointDescriptor(
        "generate_decor_image",
        "POST",
        "img/virtual-staging",
        DecorImageRequest,
        summary="Generate interior decoration images",
    ),
    EndpointDescriptor("get_image_task", "GET", "img/task/{id}", summary="Get an image task"),
    EndpointDescriptor("create_image_task", "POST", "img/midjourney", ImageTaskRequest, summary="Create an image task"),
    EndpointDescriptor("get_models", "GET", "models", summary="List available models"),
    # Nuvemshop
    EndpointDescriptor(
        "nuvemshop_connect", "POST", "nuvemshop/connect", NuvemshopConnectDto, summary="Connect a Nuvemshop store"
    ),
    EndpointDescriptor("nuvemshop_user", "GET", "nuvemshop/user/{storeId}/{token}", summary="Get the Nuvemshop user"),
    EndpointDescriptor("nuvemshop_chat", "POST", "nuvemshop/chat", ChatRequest, summary="Chat with the model"),
    EndpointDescriptor("nuvemshop_init_chat_session", "POST", "nuvemshop/chat/init", summary="Start a chat session"),
    EndpointDescriptor(
        "nuvemshop_get_session_messages", "GET", "nuvemshop/chat/session/{id}", summary="Get chat session messages"
    ),
    EndpointDescriptor(
        "nuvemshop_delete_session", "DELETE", "nuvemshop/chat/session/{id}", summary="Delete a chat session"
    ),
    # Files
    EndpointDescriptor("upload_file", "POST", "files/upload", multipart=True, summary="Upload a file"),
    EndpointDescriptor("delete_file", "DELETE", "files/{id}", summary="Delete a file"),
    EndpointDescriptor("get_files", "GET", "files", summary="List files"),
    EndpointDescriptor("get_file", "GET", "files/{id}", summary="Get a file"),
    # Vision / LLM
    EndpointDescriptor(
        "vision_image_to_text", "POST", "vision/img-to-text", VisionImageToTextRequest, summary="Describe an image"
    ),
    EndpointDescriptor(
        "prompt_generate", "POST", "llm/prompt-generate", PromptGenerateRequest, summary="Generate a prompt"
    ),
    # Fashion video
    EndpointDescriptor("get_fashion_videos", "GET", "fashion-video", summary="List fashion videos"),
    EndpointDescriptor("get_fashion_video", "GET", "fashion-video/{id}", summary="Get a fashion video"),
    EndpointDescriptor(
        "create_fashion_video", "POST", "fashion-video", FashionVideoRequest, summary="Create a fashion video"
    ),
    EndpointDescriptor(
        "create_fashion_video_task", "POST", "fashion-video/generate/{id}", summary="Create a video generation task"
    ),
    EndpointDescriptor(
        "update_fashion_video", "PUT", "fashion-video/{id}", FashionVideoRequest, summary="Update a fashion video"
    ),
    EndpointDescriptor(
        "finalize_fashion_video", "POST", "fashion-video/finalize/{id}", summary="Finalize a fashion video"
    ),
    # Fashion tryon
    EndpointDescriptor(
        "create_fashion_tryon", "POST", "fashion-tryon", FashionTryonRequest, summary="Create a fashion tryon"
    ),
    EndpointDescriptor("get_fashion_tryons", "GET", "fashion-tryon", summary="List fashion tryons"),
    EndpointDescriptor("get_fashion_tryon", "GET", "fashion-tryon/{id}", summary="Get a fashion tryon"),
    # Fashion model
    EndpointDescriptor(
        "create_fashion_model", "POST", "fashion-model", FashionModelRequest, summary="Create a fashion model"
    ),
    EndpointDescriptor(
        "regenerate_fashion_model", "POST", "fashion-model/regenerate/{id}", summary="Regenerate a fashion model"
    ),
    EndpointDescriptor("get_fashion_models", "GET", "fashion-model", summary="List fashion models"),
    EndpointDescriptor("get_fashion_model", "GET", "fashion-model/{id}", summary="Get a fashion model"),
    EndpointDescriptor("delete_fashion_model", "DELETE", "fashion-model/{id}", summary="Delete a fashion model"),
    EndpointDescriptor(
        "generate_fashion_model_prompt",
        "POST",
        "fashion-model/prompt",
        FashionModelPromptRequest,
        summary="Generate a fashion model prompt",
    ),
    EndpointDescriptor(
        "load_random_fashion_model_prompt",
        "GET",
        "fashion-model/prompt/random",
        summary="Load a random fashion model prompt",
    ),
)

_BY_NAME: dict[str, EndpointDescriptor] = {d.name: d for d in ENDPOINTS}


def get_endpoint(name: str) -> EndpointDescriptor:
    try:
        return _BY_NAME[name]
    except KeyError:
        raise KeyError(f"Unknown endpoint: {name!r}") from None
