"""Library of Congress lookup by LCCN."""

import re
import xml.etree.ElementTree as ET

from bibfetchers.exceptions import FetchError
from bibfetchers.fetchers.base import ConfiguredFetcher, IdBasedFetcher
from bibfetchers.model import BibEntry, StandardField, join_authors
from bibfetchers.utils.http import get_text

_MODS = {"mods": "http://www.loc.gov/mods/v3"}


class LibraryOfCongress(ConfiguredFetcher, IdBasedFetcher):
    """Resolve Library of Congress Control Numbers through MODS records."""

    name = "Library of Congress"

    MODS_URL = "https://lccn.loc.gov/{lccn}/mods"

    # LCCNs: optional alphabetic prefix, then 8 to 10 digits
    PATTERN = re.compile(r"^[a-z]{0,3}\d{8,10}$", re.IGNORECASE)

    def resolve_by_id(self, identifier: str) -> BibEntry | None:
        lccn = re.sub(r"[\s-]", "", identifier.strip())
        if not self.PATTERN.match(lccn):
            return None
        text = get_text(self.MODS_URL.format(lccn=lccn), timeout=self.timeout)
        return parse_mods(text) if text else None


def parse_mods(text: str) -> BibEntry | None:
    """Map a single MODS record onto a BibEntry."""
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise FetchError("Malformed MODS record", details=str(e)) from e

    mods = root if root.tag.endswith("mods") else root.find(".//mods:mods", _MODS)
    if mods is None:
        return None

    entry = BibEntry(entry_type="book")
    title_info = mods.find("mods:titleInfo", _MODS)
    if title_info is not None:
        title = title_info.findtext("mods:title", "", _MODS)
        subtitle = title_info.findtext("mods:subTitle", "", _MODS)
        entry.set(StandardField.TITLE, f"{title}: {subtitle}" if subtitle else title)

    names = []
    for name in mods.iterfind("mods:name", _MODS):
        parts = [p.text or "" for p in name.iterfind("mods:namePart", _MODS) if "type" not in p.attrib]
        if parts:
            names.append(parts[0].rstrip(",. "))
    entry.set(StandardField.AUTHOR, join_authors(names))

    origin = mods.find("mods:originInfo", _MODS)
    if origin is not None:
        entry.set(StandardField.PUBLISHER, origin.findtext("mods:publisher", None, _MODS))
        issued = origin.findtext("mods:dateIssued", "", _MODS)
        year = re.search(r"\d{4}", issued)
        entry.set(StandardField.YEAR, year.group(0) if year else None)

    for identifier in mods.iterfind("mods:identifier", _MODS):
        if identifier.get("type") == "isbn" and not entry.has(StandardField.ISBN):
            entry.set(StandardField.ISBN, (identifier.text or "").split(" ")[0])
    return entry
