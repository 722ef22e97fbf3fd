"""Tests for ArariaClient endpoint methods against a mock transport."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
import pytest

from core.domain.models import FashionTryonInput, FashionTryonRequest, ImageGenerateRequest
from core.errors import TransportError, ValidationError
from core.interfaces.hooks import RequestEvent, RequestHooks

CHAT = {
    "model": "gpt-4o-mini",
    "prompt": "hola",
    "stream": False,
    "temperature": 0.7,
    "user": 7,
    "access_token": "tok",
    "sessionId": "s1",
}
VIDEO = {
    "inputImages": ["https://cdn.test/a.png"],
    "visionDescriptions": ["a red dress"],
    "prompts": ["slow spin"],
    "theme": "summer",
    "dimension": "9:16",
    "videosPerImage": 2,
}
TRYON = {
    "modelId": "m1",
    "model": "kolors",
    "task_type": "tryon",
    "input": {"model_input": "https://cdn.test/p.png", "upper_input": "https://cdn.test/shirt.png"},
}
FASHION_MODEL = {
    "name": "Ana",
    "age": "25",
    "gender": "female",
    "bodyType": "slim",
    "ethnicity": "latina",
    "style": "casual",
}

# (method, positional args, expected verb, expected path, expected JSON body)
CASES: list[tuple[str, tuple[Any, ...], str, str, Any]] = [
    ("img_generate", ({"positivePrompt": "a cat", "model": "sdxl"},), "POST", "img/generate",
     {"positivePrompt": "a cat", "model": "sdxl"}),
    ("upscale_image", ({"image_url": "https://cdn.test/a.png"},), "POST", "img/upscale",
     {"image_url": "https://cdn.test/a.png"}),
    ("remove_background", ({"image_url": "https://cdn.test/a.png"},), "POST", "img/bkg-removal",
     {"image_url": "https://cdn.test/a.png"}),
    ("generate_decor_prime_walls", ({"prompt": "white walls"},), "POST", "img/prime-walls",
     {"prompt": "white walls"}),
    ("generate_decor_image", ({"prompt": "living room"},), "POST", "img/virtual-staging",
     {"prompt": "living room"}),
    ("get_models", (), "GET", "models", None),
    ("nuvemshop_connect", ({"storeId": 42, "arariaApiKey": "k"},), "POST", "nuvemshop/connect",
     {"storeId": 42, "arariaApiKey": "k"}),
    ("nuvemshop_user", (42, "tcs"), "GET", "nuvemshop/user/42/tcs", None),
    ("nuvemshop_chat", (CHAT,), "POST", "nuvemshop/chat", CHAT),
    ("nuvemshop_init_chat_session", (), "POST", "nuvemshop/chat/init", None),
    ("nuvemshop_get_session_messages", ("s1",), "GET", "nuvemshop/chat/session/s1", None),
    ("nuvemshop_delete_session", ("s1",), "DELETE", "nuvemshop/chat/session/s1", None),
    ("delete_file", ("f1",), "DELETE", "files/f1", None),
    ("get_files", (), "GET", "files", None),
    ("get_file", ("f1",), "GET", "files/f1", None),
    ("vision_image_to_text", ({"image": "https://cdn.test/a.png", "model": "gpt-4o"},), "POST",
     "vision/img-to-text", {"image": "https://cdn.test/a.png", "model": "gpt-4o"}),
    ("prompt_generate", ({"systemPrompt": "be brief", "description": "red dress", "model": "gpt"},), "POST",
     "llm/prompt-generate", {"systemPrompt": "be brief", "description": "red dress", "model": "gpt"}),
    ("get_fashion_videos", (), "GET", "fashion-video", None),
    ("get_fashion_video", ("v1",), "GET", "fashion-video/v1", None),
    ("create_fashion_video", (VIDEO,), "POST", "fashion-video", VIDEO),
    ("create_fashion_video_task", ("v1",), "POST", "fashion-video/generate/v1", None),
    ("update_fashion_video", ("v1", VIDEO), "PUT", "fashion-video/v1", VIDEO),
    ("finalize_fashion_video", ("v1",), "POST", "fashion-video/finalize/v1", None),
    ("create_fashion_tryon", (TRYON,), "POST", "fashion-tryon", TRYON),
    ("get_fashion_tryons", (), "GET", "fashion-tryon", None),
    ("get_fashion_tryon", ("t1",), "GET", "fashion-tryon/t1", None),
    ("create_fashion_model", (FASHION_MODEL,), "POST", "fashion-model", FASHION_MODEL),
    ("regenerate_fashion_model", ("m1",), "POST", "fashion-model/regenerate/m1", None),
    ("get_fashion_models", (), "GET", "fashion-model", None),
    ("get_fashion_model", ("m1",), "GET", "fashion-model/m1", None),
    ("delete_fashion_model", ("m1",), "DELETE", "fashion-model/m1", None),
    ("get_image_task", ("t1",), "GET", "img/task/t1", None),
    ("create_image_task", ({"model": "midjourney", "task_type": "imagine", "input": {"prompt": "a cat"}},),
     "POST", "img/midjourney", {"model": "midjourney", "task_type": "imagine", "input": {"prompt": "a cat"}}),
    ("generate_fashion_model_prompt", ({"prompt": "a model", "model": "gpt"},), "POST", "fashion-model/prompt",
     {"prompt": "a model", "model": "gpt"}),
    ("load_random_fashion_model_prompt", (), "GET", "fashion-model/prompt/random", None),
]

# (method, args before the payload, payload, required field removed)
MISSING: list[tuple[str, tuple[Any, ...], dict[str, Any], str]] = [
    ("img_generate", (), {"positivePrompt": "a cat", "model": "sdxl"}, "model"),
    ("upscale_image", (), {"image_url": "u"}, "image_url"),
    ("remove_background", (), {"image_url": "u"}, "image_url"),
    ("generate_decor_prime_walls", (), {"prompt": "p"}, "prompt"),
    ("generate_decor_image", (), {"prompt": "p"}, "prompt"),
    ("nuvemshop_connect", (), {"storeId": 42, "arariaApiKey": "k"}, "arariaApiKey"),
    ("nuvemshop_chat", (), CHAT, "sessionId"),
    ("vision_image_to_text", (), {"image": "i", "model": "m"}, "image"),
    ("prompt_generate", (), {"systemPrompt": "s", "description": "d", "model": "m"}, "systemPrompt"),
    ("create_fashion_video", (), VIDEO, "videosPerImage"),
    ("update_fashion_video", ("v1",), VIDEO, "inputImages"),
    ("create_fashion_tryon", (), TRYON, "modelId"),
    ("create_fashion_model", (), FASHION_MODEL, "bodyType"),
    ("create_image_task", (), {"model": "m", "task_type": "t"}, "task_type"),
    ("generate_fashion_model_prompt", (), {"prompt": "p", "model": "m"}, "prompt"),
]


@pytest.mark.asyncio
@pytest.mark.parametrize("method,args,verb,path,body", CASES, ids=[c[0] for c in CASES])
async def test_endpoint_sends_one_request(make_client, recorder, method, args, verb, path, body):
    async with make_client() as client:
        result = await getattr(client, method)(*args)

    assert len(recorder.requests) == 1
    request = recorder.last
    assert request.method == verb
    assert str(request.url) == f"https://x.test/{path}"
    if body is None:
        assert request.content == b""
    else:
        assert request.headers["content-type"] == "application/json"
        assert recorder.last_json() == body
    assert result == {"ok": True}


@pytest.mark.asyncio
@pytest.mark.parametrize("method,args,payload,field", MISSING, ids=[m[0] for m in MISSING])
async def test_missing_required_field_never_reaches_transport(make_client, recorder, method, args, payload, field):
    incomplete = {k: v for k, v in payload.items() if k != field}

    async with make_client() as client:
        with pytest.raises(ValidationError) as excinfo:
            await getattr(client, method)(*args, incomplete)

    assert field in excinfo.value.fields
    assert recorder.requests == []


@pytest.mark.asyncio
async def test_img_generate_scenario_returns_body_unmodified(make_client, recorder):
    recorder.json_body = {"data": [{"imageURL": "https://cdn.test/out.png", "cost": 0.002}]}

    async with make_client() as client:
        result = await client.img_generate({"positivePrompt": "a cat", "model": "sdxl"})

    assert recorder.last.method == "POST"
    assert recorder.last.url.path == "/img/generate"
    assert recorder.last_json() == {"positivePrompt": "a cat", "model": "sdxl"}
    assert result == recorder.json_body


@pytest.mark.asyncio
async def test_schema_instance_and_opaque_fields_pass_through(make_client, recorder):
    request = ImageGenerateRequest(
        positive_prompt="a cat",
        model="sdxl",
        cfg_scale=7.5,
        clip_skip=2,
        use_prompt_weighting=True,
        custom_task_uuid="0f8c",
    )

    async with make_client() as client:
        await client.img_generate(request)

    assert recorder.last_json() == {
        "positivePrompt": "a cat",
        "model": "sdxl",
        "CFGScale": 7.5,
        "clipSkip": 2,
        "usePromptWeighting": True,
        "customTaskUUID": "0f8c",
    }


@pytest.mark.asyncio
async def test_unknown_fields_are_dropped(make_client, recorder):
    async with make_client() as client:
        await client.upscale_image({"image_url": "u", "scale": 4})

    assert recorder.last_json() == {"image_url": "u"}


@pytest.mark.asyncio
async def test_nested_tryon_input_keeps_only_given_fields(make_client, recorder):
    request = FashionTryonRequest(
        model_id="m1",
        model="kolors",
        task_type="tryon",
        input=FashionTryonInput(model_input="p.png", dress_input="dress.png"),
    )

    async with make_client() as client:
        await client.create_fashion_tryon(request)

    assert recorder.last_json()["input"] == {"model_input": "p.png", "dress_input": "dress.png"}


@pytest.mark.asyncio
async def test_wrong_primitive_type_is_rejected(make_client, recorder):
    async with make_client() as client:
        with pytest.raises(ValidationError) as excinfo:
            await client.img_generate({"positivePrompt": "a cat", "model": "sdxl", "seed": "42", "checkNSFW": 1})

    assert excinfo.value.fields == ["seed", "checkNSFW"]
    assert recorder.requests == []


@pytest.mark.asyncio
async def test_delete_file_sends_no_body(make_client, recorder):
    recorder.json_body = None
    recorder.status_code = 204

    async with make_client() as client:
        result = await client.delete_file("f1")

    assert recorder.last.method == "DELETE"
    assert str(recorder.last.url) == "https://x.test/files/f1"
    assert recorder.last.content == b""
    assert "content-type" not in recorder.last.headers
    assert result is None


@pytest.mark.asyncio
async def test_path_parameters_are_url_encoded(make_client, recorder):
    async with make_client() as client:
        await client.get_file("a/b c")

    assert recorder.last.url.raw_path == b"/files/a%2Fb%20c"


@pytest.mark.asyncio
async def test_trailing_slash_is_stripped(make_client, recorder):
    async with make_client(base_url="https://x.test/") as client:
        await client.get_models()

    assert str(recorder.last.url) == "https://x.test/models"


@pytest.mark.asyncio
async def test_araria_profile_sends_key_header(make_client, recorder):
    async with make_client() as client:
        await client.get_models()
        await client.get_files()

    for request in recorder.requests:
        assert request.headers["x-araria-key"] == "abc123"
        assert "authorization" not in request.headers


@pytest.mark.asyncio
async def test_bearer_profile_sends_authorization_and_prefix(make_client, recorder):
    async with make_client(profile="bearer") as client:
        await client.get_models()

    assert recorder.last.headers["authorization"] == "Bearer abc123"
    assert "x-araria-key" not in recorder.last.headers
    assert str(recorder.last.url) == "https://x.test/araria/models"


@pytest.mark.asyncio
async def test_http_500_raises_transport_error(make_client, recorder):
    recorder.status_code = 500
    recorder.json_body = {"message": "boom"}

    async with make_client() as client:
        with pytest.raises(TransportError) as excinfo:
            await client.get_models()

    assert excinfo.value.status_code == 500
    assert excinfo.value.body == {"message": "boom"}
    assert excinfo.value.method == "GET"
    assert excinfo.value.url == "https://x.test/models"
    assert len(recorder.requests) == 1


@pytest.mark.asyncio
async def test_network_failure_raises_transport_error_without_status(make_client, recorder):
    recorder.error = httpx.ConnectError("connection refused")

    async with make_client() as client:
        with pytest.raises(TransportError) as excinfo:
            await client.get_files()

    assert excinfo.value.status_code is None
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)
    assert len(recorder.requests) == 1


@pytest.mark.asyncio
async def test_plain_text_response_is_returned_as_string(make_client, recorder):
    recorder.text_body = "A cat sitting on a red sofa."

    async with make_client() as client:
        result = await client.vision_image_to_text({"image": "https://cdn.test/a.png", "model": "gpt-4o"})

    assert result == "A cat sitting on a red sofa."


@pytest.mark.asyncio
async def test_upload_file_sends_multipart_with_single_file_field(make_client, recorder, tmp_path):
    image = tmp_path / "cat.png"
    image.write_bytes(b"\x89PNG fake")

    async with make_client() as client:
        await client.upload_file(image)

    request = recorder.last
    assert request.method == "POST"
    assert str(request.url) == "https://x.test/files/upload"
    assert request.headers["content-type"].startswith("multipart/form-data")
    assert request.headers["x-araria-key"] == "abc123"
    assert b'name="file"; filename="cat.png"' in request.content
    assert b"Content-Type: image/png" in request.content
    assert b"\x89PNG fake" in request.content
    assert request.content.count(b"Content-Disposition") == 1


@pytest.mark.asyncio
async def test_upload_file_from_bytes(make_client, recorder):
    async with make_client() as client:
        await client.upload_file(b"hello", filename="notes.txt")

    assert b'filename="notes.txt"' in recorder.last.content
    assert b"Content-Type: text/plain" in recorder.last.content


@pytest.mark.asyncio
async def test_hooks_receive_request_and_response_events(make_client, recorder):
    events: list[tuple[str, RequestEvent]] = []
    hooks = RequestHooks(
        on_request=lambda e: events.append(("request", e)),
        on_response=lambda e: events.append(("response", e)),
        on_error=lambda e: events.append(("error", e)),
    )

    async with make_client(hooks=hooks) as client:
        await client.upscale_image({"image_url": "u"})

    assert [phase for phase, _ in events] == ["request", "response"]
    request_event = events[0][1]
    assert request_event.endpoint == "upscale_image"
    assert request_event.body == {"image_url": "u"}
    assert events[1][1].status_code == 200
    assert events[1][1].elapsed_ms is not None


@pytest.mark.asyncio
async def test_hooks_receive_error_event(make_client, recorder):
    recorder.status_code = 404
    events: list[RequestEvent] = []

    async with make_client(hooks=RequestHooks.broadcast(events.append)) as client:
        with pytest.raises(TransportError):
            await client.get_file("missing")

    assert len(events) == 2
    assert events[-1].status_code == 404
    assert events[-1].error == "HTTP 404"


@pytest.mark.asyncio
async def test_validation_failure_emits_no_events(make_client, recorder):
    events: list[RequestEvent] = []

    async with make_client(hooks=RequestHooks.broadcast(events.append)) as client:
        with pytest.raises(ValidationError):
            await client.nuvemshop_chat({"prompt": "hola"})

    assert events == []


@pytest.mark.asyncio
async def test_concurrent_calls_share_one_client(make_client, recorder):
    async with make_client() as client:
        results = await asyncio.gather(*(client.get_file(f"f{i}") for i in range(5)))

    assert len(results) == 5
    assert sorted(r.url.path for r in recorder.requests) == [f"/files/f{i}" for i in range(5)]


@pytest.mark.asyncio
async def test_generic_call_by_name(make_client, recorder):
    async with make_client() as client:
        await client.call("nuvemshop_user", storeId=7, token="abc")

    assert recorder.last.url.path == "/nuvemshop/user/7/abc"


@pytest.mark.asyncio
async def test_generic_call_rejects_body_for_bodyless_endpoint(make_client, recorder):
    async with make_client() as client:
        with pytest.raises(ValueError):
            await client.call("get_models", {"unexpected": True})

    assert recorder.requests == []


@pytest.mark.asyncio
async def test_caller_supplied_http_client_is_not_closed(recorder):
    from adapters.araria_client import ArariaClient
    from core.config import ClientConfig

    http = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
    async with ArariaClient(ClientConfig(api_key="abc123", base_url="https://x.test"), http_client=http) as client:
        await client.get_models()

    assert not http.is_closed
    await http.aclose()
    assert recorder.last.headers["x-araria-key"] == "abc123"


@pytest.mark.asyncio
async def test_caller_supplied_http_client_gets_bearer_header(recorder):
    from adapters.araria_client import ArariaClient
    from core.config import ClientConfig

    config = ClientConfig(api_key="abc123", base_url="https://x.test", profile="bearer")
    async with httpx.AsyncClient(transport=httpx.MockTransport(recorder)) as http:
        client = ArariaClient(config, http_client=http)
        await client.get_models()

    assert recorder.last.headers["authorization"] == "Bearer abc123"
    assert "x-araria-key" not in recorder.last.headers
    assert str(recorder.last.url) == "https://x.test/araria/models"
