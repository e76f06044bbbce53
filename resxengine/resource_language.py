"""
resxengine/resource_language.py -- One language of a resource entity.

A ``ResourceLanguage`` owns the key/value data of one physical ResX file
(``Strings.resx``, ``Strings.de.resx``, ``de/Strings.resw`` ...).  It is the
only object that ever writes that file.

Every mutation follows the same protocol:

    1. ``before_change`` subscribers are asked; any VETO aborts the write
       and the mutating method returns False.
    2. The in-memory XML document is updated and saved atomically.
    3. ``changed`` subscribers are notified.

Only plain string resources (``<data>`` elements without a ``type`` or
``mimetype`` attribute) are exposed as keys.  Embedded files, images and
other typed resources are kept in the document untouched.

Usage::

    from resxengine.models import ProjectFile
    from resxengine.resource_language import ResourceLanguage

    pf = ProjectFile(file_path="/src/App/Strings.de.resx")
    de = ResourceLanguage(pf.get_language_name(), pf)
    de.set_value("Greeting", "Hallo")
"""

from __future__ import annotations

import logging
import os
import re
import xml.etree.ElementTree as ET
from typing import Optional

from resxengine.events import ChangeDecision, Subscribers
from resxengine.models.project_file import ProjectFile
from resxengine.utils import safe_write_bytes

logger = logging.getLogger(__name__)

_XML_SPACE = "{http://www.w3.org/XML/1998/namespace}space"
_AUTO_PREFIX = re.compile(r"ns\d+$")

# Prefixes written by Visual Studio in the embedded schema header.
ET.register_namespace("xsd", "http://www.w3.org/2001/XMLSchema")
ET.register_namespace("msdata", "urn:schemas-microsoft-com:xml-msdata")

_EMPTY_RESX = """<?xml version="1.0" encoding="utf-8"?>
<root>
  <resheader name="resmimetype">
    <value>text/microsoft-resx</value>
  </resheader>
  <resheader name="version">
    <value>2.0</value>
  </resheader>
  <resheader name="reader">
    <value>System.Resources.ResXResourceReader, System.Windows.Forms, Version=4.0.0.0, Culture=neutral, PublicKeyToken=b77a5c561934e089</value>
  </resheader>
  <resheader name="writer">
    <value>System.Resources.ResXResourceWriter, System.Windows.Forms, Version=4.0.0.0, Culture=neutral, PublicKeyToken=b77a5c561934e089</value>
  </resheader>
</root>
"""


def _is_string_resource(element: ET.Element) -> bool:
    return element.get("type") is None and element.get("mimetype") is None


def _child_text(element: ET.Element, tag: str) -> Optional[str]:
    child = element.find(tag)
    if child is None:
        return None
    return child.text or ""


def _require_key(key: str) -> None:
    if not key:
        raise ValueError("Resource key must be a non-empty string")


def _register_prefixes(path: str) -> None:
    """Make the namespace prefixes declared in *path* survive a save."""
    for _, (prefix, uri) in ET.iterparse(path, events=("start-ns",)):
        if prefix and uri and not _AUTO_PREFIX.match(prefix):
            ET.register_namespace(prefix, uri)


class ResourceLanguage:
    """The key/value store of one language, backed by one ResX file."""

    def __init__(self, name: str, file: ProjectFile):
        if name is None:
            raise ValueError("Language name must not be None")
        if file is None:
            raise ValueError("A ResourceLanguage requires a project file")

        self._name = name
        self._file = file
        self._document = self._load()
        self._nodes: dict[str, ET.Element] = {}
        for element in self._document.getroot().findall("data"):
            key = element.get("name")
            if not key or not _is_string_resource(element):
                continue
            if key in self._nodes:
                logger.warning("Duplicate key '%s' in %s; keeping the first", key, file.file_path)
                continue
            self._nodes[key] = element

        self.before_change = Subscribers()
        self.changed = Subscribers()

        logger.debug("Loaded %d keys for language '%s' from %s", len(self._nodes), name, file.file_path)

    def _load(self) -> ET.ElementTree:
        path = self._file.file_path
        if not os.path.exists(path):
            return ET.ElementTree(ET.fromstring(_EMPTY_RESX))
        try:
            _register_prefixes(path)
            parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
            return ET.parse(path, parser=parser)
        except ET.ParseError as exc:
            raise ValueError(f"Resource file '{path}' is not valid XML: {exc}") from exc

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        """The language name; empty for the neutral language."""
        return self._name

    @property
    def culture(self) -> Optional[str]:
        """The culture name, or ``None`` for the neutral language."""
        return self._name or None

    @property
    def is_neutral(self) -> bool:
        return not self._name

    @property
    def file(self) -> ProjectFile:
        return self._file

    @property
    def keys(self) -> list[str]:
        """All string resource keys, in document order."""
        return list(self._nodes)

    def __contains__(self, key) -> bool:
        return key in self._nodes

    def __repr__(self) -> str:
        return f"ResourceLanguage({self._name!r}, {self._file.file_path!r})"

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_value(self, key: str) -> Optional[str]:
        element = self._nodes.get(key)
        if element is None:
            return None
        return _child_text(element, "value") or ""

    def get_comment(self, key: str) -> Optional[str]:
        element = self._nodes.get(key)
        if element is None:
            return None
        return _child_text(element, "comment") or ""

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def set_value(self, key: str, value: Optional[str]) -> bool:
        """Set the value of *key*, creating the key when *value* is not empty.

        Returns False if a before-change subscriber vetoed the write.
        """
        return self._set_value(key, value or "", force=False)

    def force_value(self, key: str, value: Optional[str]) -> bool:
        """Like :meth:`set_value`, but always creates *key*, even for ""."""
        return self._set_value(key, value or "", force=True)

    def _set_value(self, key: str, value: str, force: bool) -> bool:
        _require_key(key)
        element = self._nodes.get(key)

        if element is None:
            if not value and not force:
                return True
        elif (_child_text(element, "value") or "") == value:
            return True

        if not self._can_change():
            return False

        if element is None:
            element = self._create_node(key)
        self._set_child_text(element, "value", value)
        logger.debug("Set '%s' in language '%s'", key, self._name)
        self._on_changed()
        return True

    def set_comment(self, key: str, comment: Optional[str]) -> bool:
        """Set the comment of *key*.  An empty comment removes it."""
        _require_key(key)
        comment = comment or ""
        element = self._nodes.get(key)

        if element is None:
            if not comment:
                return True
        elif (_child_text(element, "comment") or "") == comment:
            return True

        if not self._can_change():
            return False

        if element is None:
            element = self._create_node(key)
            self._set_child_text(element, "value", "")

        if comment:
            self._set_child_text(element, "comment", comment)
        else:
            child = element.find("comment")
            if child is not None:
                element.remove(child)

        self._on_changed()
        return True

    def remove_key(self, key: str) -> bool:
        """Remove *key* from this language.  Absent keys are a no-op."""
        _require_key(key)
        element = self._nodes.get(key)
        if element is None:
            return True

        if not self._can_change():
            return False

        self._document.getroot().remove(element)
        del self._nodes[key]
        logger.debug("Removed '%s' from language '%s'", key, self._name)
        self._on_changed()
        return True

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self) -> None:
        """Write the document to the backing file."""
        root = self._document.getroot()
        ET.indent(root, space="  ")
        payload = ET.tostring(root, encoding="utf-8", xml_declaration=True)
        safe_write_bytes(self._file.file_path, payload)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _can_change(self) -> bool:
        if self.before_change.decide(self) is ChangeDecision.VETO:
            logger.info("Change to language '%s' of %s was vetoed", self._name, self._file.file_path)
            return False
        return True

    def _on_changed(self) -> None:
        self.save()
        self.changed.notify(self)

    def _create_node(self, key: str) -> ET.Element:
        element = ET.SubElement(self._document.getroot(), "data", {"name": key})
        element.set(_XML_SPACE, "preserve")
        self._nodes[key] = element
        return element

    @staticmethod
    def _set_child_text(element: ET.Element, tag: str, text: str) -> None:
        child = element.find(tag)
        if child is None:
            child = ET.SubElement(element, tag)
        child.text = text
