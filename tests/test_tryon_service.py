"""Tests for foundation try-on rendering."""

import asyncio
from pathlib import Path

import pytest

from foundation_mirror.domain.catalog import Shade
from foundation_mirror.domain.images import ImagePayload, NoImageProduced
from foundation_mirror.services.errors import ConfigurationError
from foundation_mirror.services.tryon import (
    SWATCH_NOTE,
    TRYON_SYSTEM_INSTRUCTION,
    TryonResult,
    TryonService,
    build_tryon_prompt,
)
from tests.conftest import (
    PNG_BYTES,
    FakeImageModelClient,
    InMemoryBlobStore,
    InMemorySessionRepository,
    SteppingClock,
    make_session,
    no_image,
)

SHADE = Shade(sku="30W", name="30 Warm", hex="#e8c5a7", undertone="warm")
FACE = ImagePayload(PNG_BYTES, "image/png")


def _service(
    client: FakeImageModelClient | None,
    repository: InMemorySessionRepository,
    blob_store: InMemoryBlobStore,
    swatch_dir: Path | None = None,
) -> TryonService:
    return TryonService(
        image_client=client,
        session_repository=repository,
        blob_store=blob_store,
        model="gemini-3-pro-image-preview",
        swatch_dir=swatch_dir,
        clock=SteppingClock(),
    )


def test_apply_appends_tryons_in_order() -> None:
    repository = InMemorySessionRepository()
    repository.create_session(make_session("s1"))
    blob_store = InMemoryBlobStore()
    service = _service(FakeImageModelClient(), repository, blob_store)
    second_shade = Shade(
        sku="40N", name="40 Neutral", hex="#deba95", undertone="neutral"
    )

    first = asyncio.run(service.apply(image=FACE, shade=SHADE, session_id="s1"))
    asyncio.run(service.apply(image=FACE, shade=second_shade, session_id="s1"))

    assert first == TryonResult(image=FACE, sku="30W")
    tryons = repository.sessions["s1"].foundation_tryons
    assert [tryon.sku for tryon in tryons] == ["30W", "40N"]
    assert tryons[0].applied_at < tryons[1].applied_at
    assert tryons[0].hex == "#e8c5a7"
    assert tryons[0].undertone == "warm"
    assert tryons[0].result_image_url.startswith(
        "https://blobs.example.com/sessions/s1/foundation-30W-"
    )
    assert all(path.startswith("sessions/s1/") for path in blob_store.objects)


def test_apply_same_shade_twice_records_duplicates() -> None:
    repository = InMemorySessionRepository()
    repository.create_session(make_session("s1"))
    service = _service(FakeImageModelClient(), repository, InMemoryBlobStore())

    asyncio.run(service.apply(image=FACE, shade=SHADE, session_id="s1"))
    asyncio.run(service.apply(image=FACE, shade=SHADE, session_id="s1"))

    tryons = repository.sessions["s1"].foundation_tryons
    assert [tryon.sku for tryon in tryons] == ["30W", "30W"]
    assert tryons[0].applied_at != tryons[1].applied_at


def test_apply_returns_image_when_persistence_fails() -> None:
    repository = InMemorySessionRepository(fail_on_append=True)
    repository.create_session(make_session("s1"))
    service = _service(FakeImageModelClient(), repository, InMemoryBlobStore())

    result = asyncio.run(service.apply(image=FACE, shade=SHADE, session_id="s1"))

    assert isinstance(result, TryonResult)
    assert repository.sessions["s1"].foundation_tryons == []


def test_apply_unknown_session_still_returns_image() -> None:
    repository = InMemorySessionRepository()
    service = _service(FakeImageModelClient(), repository, InMemoryBlobStore())

    result = asyncio.run(service.apply(image=FACE, shade=SHADE, session_id="ghost"))

    assert isinstance(result, TryonResult)


def test_apply_no_image_skips_persistence() -> None:
    repository = InMemorySessionRepository()
    repository.create_session(make_session("s1"))
    blob_store = InMemoryBlobStore()
    client = FakeImageModelClient(outcomes=[no_image("Nope")])
    service = _service(client, repository, blob_store)

    result = asyncio.run(service.apply(image=FACE, shade=SHADE, session_id="s1"))

    assert result == NoImageProduced(raw_text="Nope")
    assert blob_store.objects == {}
    assert repository.sessions["s1"].foundation_tryons == []


def test_apply_attaches_swatch_when_available(tmp_path: Path) -> None:
    (tmp_path / "30W.png").write_bytes(b"swatch")
    client = FakeImageModelClient()
    service = _service(
        client, InMemorySessionRepository(), InMemoryBlobStore(), swatch_dir=tmp_path
    )

    asyncio.run(service.apply(image=FACE, shade=SHADE, session_id="s1"))

    call = client.calls[0]
    assert call["system_instruction"] == TRYON_SYSTEM_INSTRUCTION
    assert call["images"] == [FACE, ImagePayload(b"swatch", "image/png")]
    assert str(call["prompt"]).endswith(SWATCH_NOTE)


def test_apply_without_swatch_uses_text_description(tmp_path: Path) -> None:
    client = FakeImageModelClient()
    service = _service(
        client, InMemorySessionRepository(), InMemoryBlobStore(), swatch_dir=tmp_path
    )

    asyncio.run(service.apply(image=FACE, shade=SHADE, session_id="s1"))

    call = client.calls[0]
    assert call["images"] == [FACE]
    assert SWATCH_NOTE not in str(call["prompt"])
    assert "#e8c5a7" in str(call["prompt"])


def test_load_swatch_rejects_path_like_skus(tmp_path: Path) -> None:
    service = _service(
        FakeImageModelClient(),
        InMemorySessionRepository(),
        InMemoryBlobStore(),
        swatch_dir=tmp_path,
    )

    assert service.load_swatch("../secret") is None


def test_build_tryon_prompt_names_shade() -> None:
    prompt = build_tryon_prompt(SHADE, with_swatch=False)

    assert "30 Warm" in prompt
    assert "Undertone: warm" in prompt


def test_apply_without_image_client_raises_configuration_error() -> None:
    service = _service(None, InMemorySessionRepository(), InMemoryBlobStore())

    with pytest.raises(ConfigurationError):
        asyncio.run(service.apply(image=FACE, shade=SHADE, session_id="s1"))
