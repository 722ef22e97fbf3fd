"""Schemas de request/response de la API Araria (Pydantic v2).

Por qué Pydantic en el dominio:
- Cada schema es una descripción declarativa del contrato de la API; la
  validación estructural la hace un único validador genérico
  (`core.validation.validate_payload`).
- Los nombres de wire (camelCase, `CFGScale`, `task_type`...) se mantienen como
  alias; en Python se usan nombres snake_case.

Nota:
- Los primitivos son estrictos: un string donde se espera un número es un error,
  no una conversión.
- Los opcionales de request se declaran sin `| None`: pueden omitirse, pero un
  `null` explícito es un error (el default no se valida).
- Los campos cuyo efecto en el servidor no conocemos (`customTaskUUID`,
  `clipSkip`, `usePromptWeighting`, `input`) se reenvían tal cual.
"""

from __future__ import annotations

from typing import Annotated, Any, Union

from pydantic import BaseModel, Field, StrictBool, StrictFloat, StrictInt, StrictStr
from pydantic.config import ConfigDict

# JSON no tiene NaN ni infinitos.
Number = Union[StrictInt, Annotated[StrictFloat, Field(allow_inf_nan=False)]]


class ApiSchema(BaseModel):
    """Base común: acepta nombre Python o alias, descarta claves desconocidas."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        protected_namespaces=(),
    )


# --- Imagen -----------------------------------------------------------------


class ImageGenerateRequest(ApiSchema):
    """Generación de imagen (`POST img/generate`)."""

    positive_prompt: StrictStr = Field(
        ...,
        alias="positivePrompt",
        description="Prompt positivo.",
    )
    model: StrictStr = Field(
        ...,
        description="Identificador del modelo (p.ej. 'sdxl').",
    )
    scheduler: StrictStr = None
    negative_prompt: StrictStr = Field(default=None, alias="negativePrompt")
    seed: Number = None
    steps: Number = None
    check_nsfw: StrictBool = Field(default=None, alias="checkNSFW")
    seed_image: StrictStr = Field(
        default=None,
        alias="seedImage",
        description="Imagen base (URL, UUID o data URI) para img2img.",
    )
    mask_image: StrictStr = Field(default=None, alias="maskImage")
    strength: Number = None
    height: Number = None
    width: Number = None
    cfg_scale: Number = Field(default=None, alias="CFGScale")
    clip_skip: Number = Field(default=None, alias="clipSkip")
    use_prompt_weighting: StrictBool = Field(default=None, alias="usePromptWeighting")
    prompt_weighting: StrictStr = Field(default=None, alias="promptWeighting")
    number_results: Number = Field(default=None, alias="numberResults")
    output_type: StrictStr = Field(default=None, alias="outputType")
    output_format: StrictStr = Field(default=None, alias="outputFormat")
    include_cost: StrictBool = Field(default=None, alias="includeCost")
    custom_task_uuid: StrictStr = Field(default=None, alias="customTaskUUID")


class UpscaleRequest(ApiSchema):
    image_url: StrictStr = Field(..., description="URL pública de la imagen a escalar.")


class BackgroundRemovalRequest(ApiSchema):
    image_url: StrictStr = Field(..., description="URL pública de la imagen a recortar.")


class DecorPrimeWallsRequest(ApiSchema):
    prompt: StrictStr


class DecorImageRequest(ApiSchema):
    prompt: StrictStr


class ImageTaskRequest(ApiSchema):
    """Tarea asíncrona de imagen (`POST img/midjourney`).

    `input` es opaco: se reenvía sin inspección.
    """

    model: StrictStr
    task_type: StrictStr
    input: Any = None


# --- Nuvemshop --------------------------------------------------------------


class ChatRequest(ApiSchema):
    model: StrictStr
    prompt: StrictStr
    stream: StrictBool
    temperature: Number
    user: Number
    access_token: StrictStr
    session_id: StrictStr = Field(..., alias="sessionId")


class NuvemshopConnectDto(ApiSchema):
    store_id: Number = Field(..., alias="storeId")
    araria_api_key: StrictStr = Field(..., alias="arariaApiKey")


class NuvemshopUserDto(ApiSchema):
    """Usuario Nuvemshop tal como lo guarda el servidor tras el OAuth."""

    store_id: Number = Field(..., alias="storeId")
    access_token: StrictStr = Field(..., alias="accessToken")
    token_type: StrictStr = Field(..., alias="tokenType")
    scope: StrictStr


class NuvemshopUser(ApiSchema):
    user_id: Number


# --- Vision / LLM -----------------------------------------------------------


class VisionImageToTextRequest(ApiSchema):
    image: StrictStr = Field(..., description="URL o data URI de la imagen a describir.")
    model: StrictStr


class PromptGenerateRequest(ApiSchema):
    system_prompt: StrictStr = Field(..., alias="systemPrompt")
    description: StrictStr
    model: StrictStr


# --- Fashion ----------------------------------------------------------------


class FashionVideoRequest(ApiSchema):
    """Alta/actualización de un fashion video.

    El flujo (generación, selección, finalizado) vive en el servidor; aquí solo
    describimos la forma del payload.
    """

    input_images: list[StrictStr] = Field(..., alias="inputImages")
    vision_descriptions: list[StrictStr] = Field(..., alias="visionDescriptions")
    prompts: list[StrictStr]
    theme: StrictStr
    dimension: StrictStr
    videos_per_image: Number = Field(..., alias="videosPerImage")
    video_urls: list[StrictStr] = Field(default=None, alias="videoUrls")
    selected_video_urls: list[StrictStr] = Field(default=None, alias="selectedVideoUrls")
    bg_color: StrictStr = Field(default=None, alias="bgColor")
    music_path: StrictStr = Field(default=None, alias="musicPath")
    logo_path: StrictStr = Field(default=None, alias="logoPath")
    audio_start_at: Number = Field(default=None, alias="audioStartAt")


class FashionVideoResponse(ApiSchema):
    """Forma documentada de `GET fashion-video/{id}`.

    El cliente no la aplica (las respuestas se devuelven sin transformar); está
    disponible para quien quiera tipar el resultado con `model_validate`.
    """

    id: StrictStr
    status: StrictStr
    created_at: StrictStr = Field(..., alias="createdAt")
    updated_at: StrictStr = Field(..., alias="updatedAt")
    input_images: list[StrictStr] = Field(..., alias="inputImages")
    vision_descriptions: list[StrictStr] = Field(..., alias="visionDescriptions")
    prompts: list[StrictStr]
    theme: StrictStr
    dimension: StrictStr
    videos_per_image: Number = Field(..., alias="videosPerImage")
    video_urls: list[StrictStr] = Field(..., alias="videoUrls")
    selected_video_urls: list[StrictStr] = Field(..., alias="selectedVideoUrls")
    video_output_path: StrictStr | None = Field(default=None, alias="videoOutputPath")
    video_output_file_id: StrictStr | None = Field(default=None, alias="videoOutputFileId")
    bg_color: StrictStr | None = Field(default=None, alias="bgColor")
    music_path: StrictStr | None = Field(default=None, alias="musicPath")
    logo_path: StrictStr | None = Field(default=None, alias="logoPath")
    audio_start_at: Number | None = Field(default=None, alias="audioStartAt")
    tasks: list[Any] | None = None
    watermark: StrictBool | None = None


class FashionTryonInput(ApiSchema):
    model_input: StrictStr = Field(..., description="Imagen del modelo (persona).")
    dress_input: StrictStr = None
    upper_input: StrictStr = None
    lower_input: StrictStr = None


class FashionTryonRequest(ApiSchema):
    model_id: StrictStr = Field(..., alias="modelId")
    model: StrictStr
    task_type: StrictStr
    input: FashionTryonInput


class FashionModelRequest(ApiSchema):
    name: StrictStr
    description: StrictStr = None
    age: StrictStr
    gender: StrictStr
    body_type: StrictStr = Field(..., alias="bodyType")
    ethnicity: StrictStr
    style: StrictStr
    prompt: StrictStr = None


class FashionModelPromptRequest(ApiSchema):
    system_prompt: StrictStr = Field(default=None, alias="systemPrompt")
    prompt: StrictStr
    model: StrictStr
