"""Cliente tipado del API Araria.

Uso:

    async with ArariaClient(ClientConfig(api_key="...")) as araria:
        result = await araria.img_generate({"positivePrompt": "a cat", "model": "sdxl"})

Cada método es un atajo sobre `core.endpoints.ENDPOINTS`: valida el payload
(si el endpoint declara schema) y emite una única request. Los payloads pueden
pasarse como instancia del schema o como dict (nombres de wire o Python).
"""

from __future__ import annotations

import mimetypes
from collections.abc import Mapping
from pathlib import Path
from typing import Any, BinaryIO, Union

import httpx

from adapters.dispatcher import Dispatcher
from adapters.http_client import build_async_client
from core.config import ClientConfig
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
from core.endpoints import get_endpoint
from core.interfaces.hooks import RequestHooks

Payload = Mapping[str, Any]
FileInput = Union[bytes, BinaryIO, Path, str]


def build_file_part(
    file: FileInput,
    *,
    filename: str | None = None,
    content_type: str | None = None,
) -> dict[str, tuple[str, bytes, str]]:
    """Arma el campo multipart `file` a partir de bytes, ruta o file object."""

    if isinstance(file, (str, Path)):
        path = Path(file)
        content = path.read_bytes()
        filename = filename or path.name
    elif isinstance(file, (bytes, bytearray)):
        content = bytes(file)
        filename = filename or "upload.bin"
    else:
        content = file.read()
        filename = filename or Path(str(getattr(file, "name", "upload.bin"))).name

    content_type = content_type or mimetypes.guess_type(filename)[0] or "application/octet-stream"
    return {"file": (filename, content, content_type)}


class ArariaClient:
    """Un método por endpoint remoto; ver `core.endpoints` para verbo y path."""

    def __init__(
        self,
        config: ClientConfig,
        *,
        hooks: RequestHooks | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._owns_client = http_client is None
        self._http = http_client or build_async_client(config, transport=transport)
        self._dispatcher = Dispatcher(config, self._http, hooks)

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def __aenter__(self) -> "ArariaClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def call(self, name: str, payload: Any = None, **path_params: Any) -> Any:
        """Invoca un endpoint del registro por nombre."""

        return await self._dispatcher.call(get_endpoint(name), payload, **path_params)

    # --- Imagen -------------------------------------------------------------

    async def img_generate(self, request: ImageGenerateRequest | Payload) -> Any:
        return await self.call("img_generate", request)

    async def upscale_image(self, request: UpscaleRequest | Payload) -> Any:
        return await self.call("upscale_image", request)

    async def remove_background(self, request: BackgroundRemovalRequest | Payload) -> Any:
        return await self.call("remove_background", request)

    async def generate_decor_prime_walls(self, request: DecorPrimeWallsRequest | Payload) -> Any:
        return await self.call("generate_decor_prime_walls", request)

    async def generate_decor_image(self, request: DecorImageRequest | Payload) -> Any:
        """Virtual staging (decoración de interiores)."""

        return await self.call("generate_decor_image", request)

    async def get_models(self) -> Any:
        return await self.call("get_models")

    async def get_image_task(self, task_id: str) -> Any:
        return await self.call("get_image_task", id=task_id)

    async def create_image_task(self, request: ImageTaskRequest | Payload) -> Any:
        return await self.call("create_image_task", request)

    # --- Nuvemshop ----------------------------------------------------------

    async def nuvemshop_connect(self, request: NuvemshopConnectDto | Payload) -> Any:
        """Conecta la app Nuvemshop con la cuenta Araria."""

        return await self.call("nuvemshop_connect", request)

    async def nuvemshop_user(self, store_id: int, token: str) -> Any:
        return await self.call("nuvemshop_user", storeId=store_id, token=token)

    async def nuvemshop_chat(self, request: ChatRequest | Payload) -> Any:
        return await self.call("nuvemshop_chat", request)

    async def nuvemshop_init_chat_session(self) -> Any:
        return await self.call("nuvemshop_init_chat_session")

    async def nuvemshop_get_session_messages(self, session_id: str) -> Any:
        return await self.call("nuvemshop_get_session_messages", id=session_id)

    async def nuvemshop_delete_session(self, session_id: str) -> Any:
        return await self.call("nuvemshop_delete_session", id=session_id)

    # --- Files --------------------------------------------------------------

    async def upload_file(
        self,
        file: FileInput,
        *,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> Any:
        """Sube un archivo como multipart (campo único `file`)."""

        files = build_file_part(file, filename=filename, content_type=content_type)
        return await self._dispatcher.call(get_endpoint("upload_file"), files=files)

    async def delete_file(self, file_id: str) -> Any:
        return await self.call("delete_file", id=file_id)

    async def get_files(self) -> Any:
        return await self.call("get_files")

    async def get_file(self, file_id: str) -> Any:
        return await self.call("get_file", id=file_id)

    # --- Vision / LLM -------------------------------------------------------

    async def vision_image_to_text(self, request: VisionImageToTextRequest | Payload) -> Any:
        return await self.call("vision_image_to_text", request)

    async def prompt_generate(self, request: PromptGenerateRequest | Payload) -> Any:
        return await self.call("prompt_generate", request)

    # --- Fashion video ------------------------------------------------------

    async def get_fashion_videos(self) -> Any:
        return await self.call("get_fashion_videos")

    async def get_fashion_video(self, fashion_video_id: str) -> Any:
        """Devuelve el video tal cual; `FashionVideoResponse` sirve para tiparlo."""

        return await self.call("get_fashion_video", id=fashion_video_id)

    async def create_fashion_video(self, request: FashionVideoRequest | Payload) -> Any:
        return await self.call("create_fashion_video", request)

    async def create_fashion_video_task(self, fashion_video_id: str) -> Any:
        return await self.call("create_fashion_video_task", id=fashion_video_id)

    async def update_fashion_video(self, fashion_video_id: str, request: FashionVideoRequest | Payload) -> Any:
        return await self.call("update_fashion_video", request, id=fashion_video_id)

    async def finalize_fashion_video(self, fashion_video_id: str) -> Any:
        return await self.call("finalize_fashion_video", id=fashion_video_id)

    # --- Fashion tryon ------------------------------------------------------

    async def create_fashion_tryon(self, request: FashionTryonRequest | Payload) -> Any:
        return await self.call("create_fashion_tryon", request)

    async def get_fashion_tryons(self) -> Any:
        return await self.call("get_fashion_tryons")

    async def get_fashion_tryon(self, tryon_id: str) -> Any:
        return await self.call("get_fashion_tryon", id=tryon_id)

    # --- Fashion model ------------------------------------------------------

    async def create_fashion_model(self, request: FashionModelRequest | Payload) -> Any:
        return await self.call("create_fashion_model", request)

    async def regenerate_fashion_model(self, model_id: str) -> Any:
        return await self.call("regenerate_fashion_model", id=model_id)

    async def get_fashion_models(self) -> Any:
        return await self.call("get_fashion_models")

    async def get_fashion_model(self, model_id: str) -> Any:
        return await self.call("get_fashion_model", id=model_id)

    async def delete_fashion_model(self, model_id: str) -> Any:
        return await self.call("delete_fashion_model", id=model_id)

    async def generate_fashion_model_prompt(self, request: FashionModelPromptRequest | Payload) -> Any:
        return await self.call("generate_fashion_model_prompt", request)

    async def load_random_fashion_model_prompt(self) -> Any:
        return await self.call("load_random_fashion_model_prompt")
