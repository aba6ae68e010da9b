"""
Unit tests for services.images: storing uploads and releasing orphaned files.
"""
import io

import pytest
from starlette.datastructures import Headers, UploadFile

from furniture_store.core.errors import Unexpected, ValidationFailed
from furniture_store.models.brand import Brand
from furniture_store.models.category import Category
from furniture_store.models.product import Product
from furniture_store.services import images


pytestmark = pytest.mark.asyncio


def make_upload(filename: str, data: bytes = b"\x89PNG fake", content_type: str = "image/png") -> UploadFile:
    return UploadFile(file=io.BytesIO(data), filename=filename, headers=Headers({"content-type": content_type}))


async def _product(image: str | None, category: Category | None = None) -> Product:
    category = category or await Category.create(name=f"cat-{image}")
    brand = await Brand.create(name="Oakline")
    return await Product.create(
        name="Chair", price=10, old_price=12, material="oak",
        category=category, brand=brand, image=image,
    )


async def test_save_writes_file_under_upload_dir(image_store):
    path = await image_store.save(make_upload("sofa.png", b"sofa-bytes"))
    assert path == "uploads/sofa.png"
    assert image_store.absolute(path).read_bytes() == b"sofa-bytes"
    assert image_store.exists(path)


async def test_save_reuses_existing_file_without_rewriting(image_store):
    first = await image_store.save(make_upload("table.png", b"original"))
    second = await image_store.save(make_upload("table.png", b"replacement"))
    assert first == second
    assert image_store.absolute(first).read_bytes() == b"original"


async def test_save_strips_directories_from_file_name(image_store):
    path = await image_store.save(make_upload("../../evil.png"))
    assert path == "uploads/evil.png"


@pytest.mark.parametrize("filename", ["..", "a/..", "."])
async def test_save_rejects_names_without_a_file_part(image_store, filename):
    with pytest.raises(ValidationFailed) as excinfo:
        await image_store.save(make_upload(filename))
    assert excinfo.value.code == "INVALID_IMAGE"


async def test_save_does_not_reuse_a_directory(image_store):
    (image_store.directory / "shelf.png").mkdir()
    with pytest.raises(Unexpected):
        await image_store.save(make_upload("shelf.png"))


async def test_save_writes_off_the_event_loop(image_store, monkeypatch):
    calls = []

    async def recording_threadpool(func, *args):
        calls.append(func)
        return func(*args)

    monkeypatch.setattr(images, "run_in_threadpool", recording_threadpool)
    path = await image_store.save(make_upload("stool.png", b"stool"))
    assert len(calls) == 1
    assert image_store.absolute(path).read_bytes() == b"stool"


async def test_save_rejects_non_images(image_store):
    with pytest.raises(ValidationFailed):
        await image_store.save(make_upload("notes.txt", b"hi", content_type="text/plain"))


async def test_is_referenced_by_category_or_product(db, image_store):
    assert await image_store.is_referenced("uploads/a.png") is False

    category = await Category.create(name="Sofas", image="uploads/a.png")
    assert await image_store.is_referenced("uploads/a.png") is True
    assert await image_store.is_referenced("uploads/a.png", exclude_category_id=category.id) is False

    product = await _product("uploads/a.png", category=await Category.create(name="Beds"))
    assert await image_store.is_referenced("uploads/a.png", exclude_category_id=category.id) is True
    assert await image_store.is_referenced(
        "uploads/a.png", exclude_category_id=category.id, exclude_product_id=product.id
    ) is False


async def test_shared_file_survives_until_last_owner_is_gone(db, image_store):
    path = await image_store.save(make_upload("lamp.png"))
    first = await _product(path)
    second = await _product(path)

    await first.delete()
    assert await image_store.release(path) is False
    assert image_store.exists(path)

    await second.delete()
    assert await image_store.release(path) is True
    assert not image_store.exists(path)


async def test_release_swallows_missing_file(db, image_store):
    assert await image_store.release("uploads/ghost.png") is False


async def test_release_ignores_paths_outside_upload_dir(db, image_store, tmp_path):
    outside = tmp_path / "settings.py"
    outside.write_text("keep me")
    assert await image_store.release("settings.py") is False
    assert await image_store.release("uploads/../settings.py") is False
    assert await image_store.release(None) is False
    assert outside.exists()
