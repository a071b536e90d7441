"""
Tests for the factory patch registry in zipclone.patching.
"""

import asyncio
import zipfile

import pytest

from tests.mocks import archive
from tests.mocks.archive_calls import (
    FACTORY_NAMES,
    close_archive,
    failing_library,
    open_archive,
)
from zipclone import configure
from zipclone.exceptions import UnknownFactoryError
from zipclone.patching import apply_patch, apply_patch_to_all

EXPECTED_PRIMARY = {
    "open": str,
    "from_fd": int,
    "from_buffer": bytes,
    "from_random_access_reader": archive.BufferReader,
}


@pytest.fixture
def library():
    """Provide an unpatched copy of the mock library."""
    return configure(archive)


@pytest.fixture
def recorded_calls():
    return []


@pytest.fixture
def marking_transform(recorded_calls):
    """Transform recording its canonical call and marking the produced zip file."""

    def transform(original):
        def patched(primary, secondary, options, callback):
            recorded_calls.append(
                {
                    "primary": primary,
                    "secondary": secondary,
                    "options": dict(options),
                    "callback": callback,
                }
            )

            def on_open(err, zip_file=None):
                if err is not None:
                    callback(err)
                    return
                zip_file.mutated = True
                callback(None, zip_file)

            return original(primary, secondary, options, on_open)

        return patched

    return transform


def _assert_canonical_call(call, factory_name, archive_path):
    assert isinstance(call["primary"], EXPECTED_PRIMARY[factory_name])
    if factory_name == "from_random_access_reader":
        assert call["secondary"] == archive_path.stat().st_size
    else:
        assert call["secondary"] is None
    assert call["options"] == {"lazy_entries": True}
    assert callable(call["callback"])


@pytest.mark.asyncio
@pytest.mark.parametrize("factory_name", FACTORY_NAMES)
async def test_apply_patch_mutation_reaches_caller(
    library, marking_transform, recorded_calls, archive_path, factory_name
):
    """Test that a patched factory hands the transformed zip file to the caller."""
    apply_patch(namespace=library, factory_name=factory_name, transform=marking_transform)

    zip_file = await open_archive(library, factory_name, archive_path, {"lazy_entries": True})

    assert zip_file.mutated is True
    assert len(recorded_calls) == 1
    _assert_canonical_call(recorded_calls[0], factory_name, archive_path)
    await close_archive(zip_file)


@pytest.mark.asyncio
@pytest.mark.parametrize("factory_name", FACTORY_NAMES)
async def test_apply_patch_to_all_covers_every_factory(
    library, marking_transform, recorded_calls, archive_path, factory_name
):
    """Test that one transform applied to all factories sees canonical calls."""
    apply_patch_to_all(namespace=library, transform=marking_transform)

    zip_file = await open_archive(library, factory_name, archive_path, {"lazy_entries": True})

    assert zip_file.mutated is True
    _assert_canonical_call(recorded_calls[0], factory_name, archive_path)
    await close_archive(zip_file)


@pytest.mark.asyncio
async def test_apply_patch_defaults_options_when_omitted(
    library, marking_transform, recorded_calls, archive_path
):
    """Test that the canonical call carries empty options when the caller omitted them."""
    apply_patch(namespace=library, factory_name="from_buffer", transform=marking_transform)

    zip_file = await open_archive(library, "from_buffer", archive_path)

    assert recorded_calls[0]["options"] == {}
    assert zip_file.mutated is True
    await close_archive(zip_file)


def test_apply_patch_returns_public_entry_point(library, marking_transform):
    """Test that apply_patch stores and returns the new entry point."""
    public = apply_patch(namespace=library, factory_name="open", transform=marking_transform)

    assert library.open is public
    assert public is not archive.open
    assert public.__name__ == "open"


def test_apply_patch_rejects_unknown_factory(library, marking_transform):
    """Test that an unknown factory name fails fast without touching the namespace."""
    before = dict(vars(library))

    with pytest.raises(UnknownFactoryError) as excinfo:
        apply_patch(namespace=library, factory_name="from_stream", transform=marking_transform)

    assert excinfo.value.name == "from_stream"
    assert "from_random_access_reader" in str(excinfo.value)
    assert isinstance(excinfo.value, LookupError)
    assert dict(vars(library)) == before


@pytest.mark.asyncio
async def test_patches_chain_outermost_first(library, archive_path):
    """Test that the last applied patch runs first and the original runs innermost."""
    order = []

    def tracing(label):
        def transform(original):
            def patched(primary, secondary, options, callback):
                order.append(f"{label}:call")

                def on_open(err, zip_file=None):
                    order.append(f"{label}:done")
                    callback(err, zip_file)

                return original(primary, secondary, options, on_open)

            return patched

        return transform

    apply_patch(namespace=library, factory_name="from_buffer", transform=tracing("first"))
    apply_patch(namespace=library, factory_name="from_buffer", transform=tracing("second"))

    zip_file = await open_archive(library, "from_buffer", archive_path, {"lazy_entries": True})

    assert order == ["second:call", "first:call", "first:done", "second:done"]
    await close_archive(zip_file)


@pytest.mark.asyncio
async def test_patched_factory_forwards_errors_unchanged(library, tmp_path, marking_transform):
    """Test that library errors reach the caller's callback untouched."""
    apply_patch_to_all(namespace=library, transform=marking_transform)
    broken = tmp_path / "broken.zip"
    broken.write_bytes(b"not a zip archive")

    with pytest.raises(zipfile.BadZipFile):
        await open_archive(library, "from_buffer", broken)
    with pytest.raises(FileNotFoundError):
        await open_archive(library, "open", tmp_path / "missing.zip")

    received = asyncio.get_running_loop().create_future()
    library.from_buffer(b"still not a zip", lambda *args: received.set_result(args))
    args = await asyncio.wait_for(received, timeout=2.0)

    assert len(args) == 1
    assert isinstance(args[0], zipfile.BadZipFile)


@pytest.mark.asyncio
@pytest.mark.parametrize("factory_name", FACTORY_NAMES)
async def test_patched_factory_forwards_the_library_error_object(
    marking_transform, archive_path, factory_name
):
    """Test that the caller receives the very error object the library reported."""
    error = zipfile.BadZipFile("truncated central directory")
    library = failing_library(error)
    apply_patch_to_all(namespace=library, transform=marking_transform)

    with pytest.raises(zipfile.BadZipFile) as excinfo:
        await open_archive(library, factory_name, archive_path)

    assert excinfo.value is error
