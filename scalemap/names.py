from typing import Dict, List, TypedDict

from scalemap.project_types import LabelRef


class CatalogEntry(TypedDict):
    name_en: str
    name_ua: str
    name_es: str


# Built-in entries, referenced by index from catalog labels
BODIES: List[CatalogEntry] = [
    {"name_en": "Earth", "name_ua": "Земля", "name_es": "Tierra"},
    {"name_en": "Moon", "name_ua": "Місяць", "name_es": "Luna"},
    {"name_en": "Sun", "name_ua": "Сонце", "name_es": "Sol"},
    {"name_en": "Mars", "name_ua": "Марс", "name_es": "Marte"},
    {"name_en": "Jupiter", "name_ua": "Юпітер", "name_es": "Júpiter"},
    {"name_en": "Sirius", "name_ua": "Сіріус", "name_es": "Sirio"},
]


class NameResolver:
    """Turns label references into display text for a language"""

    def __init__(self, catalog: List[Dict[str, str]] | None = None):
        self.catalog = catalog if catalog is not None else BODIES

    def resolve(self, ref: LabelRef | None, lang: str) -> str:
        if not ref:
            return ""
        if ref["type"] == "custom":
            return ref.get("name") or ""
        if ref["type"] == "catalog":
            index = ref.get("index")
            if not isinstance(index, int) or index < 0 or index >= len(self.catalog):
                return ""
            entry = self.catalog[index]
            return entry.get(f"name_{lang}") or entry.get("name_en") or ""
        return ""
