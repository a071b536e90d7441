import zipfile

import pytest

from tests.mocks import archive
from tests.mocks.archive_calls import ENTRY_NAMES


@pytest.fixture
def archive_path(tmp_path):
    """Write a fixture archive holding four entries."""
    path = tmp_path / "fixture.zip"
    with zipfile.ZipFile(path, "w") as zip_archive:
        zip_archive.writestr("alpha.txt", "alpha")
        zip_archive.writestr("beta.txt", "beta" * 16)
        zip_archive.writestr("nested/", "")
        zip_archive.writestr("nested/gamma.txt", "gamma")
    return path


@pytest.fixture
def restore_archive():
    """Fixture restoring the mock library after tests that patch it in place."""
    original = dict(vars(archive))

    yield archive

    namespace = vars(archive)
    for key in set(namespace) - set(original):
        del namespace[key]
    namespace.update(original)
