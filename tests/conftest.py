"""
Shared pytest fixtures for the ResX engine test suite.

Provides:
    - write_resx: helper that writes a minimal .resx file
    - resx_project: a temporary solution folder with one project and a
      three-language "Strings" resource
    - owner: a stand-in for the owning manager
    - make_entity: factory building a ResourceEntity from the sample files
"""

import os
import sys
from pathlib import Path
from xml.sax.saxutils import escape, quoteattr

import pytest

# ---------------------------------------------------------------------------
# Ensure the packages are importable regardless of where pytest is invoked
# ---------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resxengine.models.project_file import ProjectFile  # noqa: E402
from resxengine.resource_entity import ResourceEntity  # noqa: E402


def _write_resx(path, values=None, comments=None):
    """Write a .resx file containing *values* (key -> value).

    *comments* optionally maps keys to comments.
    """
    values = values or {}
    comments = comments or {}
    parts = [
        '<?xml version="1.0" encoding="utf-8"?>',
        "<root>",
        "  <!-- generated by the test suite -->",
        '  <resheader name="resmimetype"><value>text/microsoft-resx</value></resheader>',
    ]
    for key, value in values.items():
        parts.append(f"  <data name={quoteattr(key)} xml:space=\"preserve\">")
        parts.append(f"    <value>{escape(value)}</value>")
        if key in comments:
            parts.append(f"    <comment>{escape(comments[key])}</comment>")
        parts.append("  </data>")
    parts.append("</root>")

    path = str(path)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as fh:
        fh.write("\n".join(parts))
    return path


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def write_resx():
    """Return the .resx writing helper."""
    return _write_resx


@pytest.fixture
def resx_project(tmp_path):
    """Create a temporary solution tree with one project.

    Layout::

        solution/
            MyProj/
                MyProj.csproj
                sub/
                    Strings.resx      Apple, farewell, Greeting
                    Strings.de.resx   Greeting, Zebra
                    Strings.fr.resx   Greeting

    Returns the path to the ``sub`` folder.
    """
    project_dir = tmp_path / "solution" / "MyProj"
    sub_dir = project_dir / "sub"
    sub_dir.mkdir(parents=True)
    (project_dir / "MyProj.csproj").write_text("<Project />", encoding="utf-8")

    _write_resx(
        sub_dir / "Strings.resx",
        {"Greeting": "Hello", "farewell": "Goodbye", "Apple": "Apple"},
        comments={"Greeting": "Shown on the start page"},
    )
    _write_resx(sub_dir / "Strings.de.resx", {"Greeting": "Hallo", "Zebra": "Zebra (de)"})
    _write_resx(sub_dir / "Strings.fr.resx", {"Greeting": "Bonjour"})
    return sub_dir


@pytest.fixture
def project_files(resx_project):
    """ProjectFile objects for the sample resource, in arbitrary order."""
    return [
        ProjectFile(
            file_path=str(resx_project / name),
            project_name="MyProj",
            unique_project_name="MyProj/MyProj.csproj",
        )
        for name in ("Strings.fr.resx", "Strings.resx", "Strings.de.resx")
    ]


@pytest.fixture
def owner():
    """A stand-in for the owning resource manager."""
    return object()


@pytest.fixture
def make_entity(owner, resx_project, project_files):
    """Return a factory that builds the sample entity."""

    def _make(files=None, **kwargs):
        return ResourceEntity(
            kwargs.pop("owner", owner),
            kwargs.pop("project_name", "MyProj"),
            kwargs.pop("base_name", "Strings"),
            kwargs.pop("directory", str(resx_project)),
            project_files if files is None else files,
            **kwargs,
        )

    return _make
