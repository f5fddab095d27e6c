from enum import Enum


class Difficulty(Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"

    @classmethod
    def from_any(cls, value):
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized or member.name.lower() == normalized:
                    return member
        raise ValueError(f"Cannot parse {value!r} into {cls.__name__}")

    @property
    def label(self):
        return self.name.title()


class SortKey(Enum):
    NAME = "name"
    NUMBER = "number"
    CATEGORY = "category"
    COST = "cost"
    STOCK = "stock"

    @classmethod
    def from_any(cls, value):
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            # backend column names
            legacy_map = {
                "part_name": cls.NAME,
                "part_number": cls.NUMBER,
                "unit_cost": cls.COST,
                "stock_quantity": cls.STOCK,
            }
            if normalized in legacy_map:
                return legacy_map[normalized]
            for member in cls:
                if member.value == normalized or member.name.lower() == normalized:
                    return member
        raise ValueError(f"Cannot parse {value!r} into {cls.__name__}")

    @property
    def label(self):
        return _SORT_KEY_LABELS.get(self, self.name.title())


class SortOrder(Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def from_any(cls, value):
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            legacy_map = {"ascending": cls.ASC, "descending": cls.DESC}
            if normalized in legacy_map:
                return legacy_map[normalized]
            for member in cls:
                if member.value == normalized:
                    return member
        raise ValueError(f"Cannot parse {value!r} into {cls.__name__}")


class StockLevel(Enum):
    LOW = "low"
    WARNING = "warning"
    OK = "ok"

    @classmethod
    def for_stock(cls, stock, minimum):
        if stock <= minimum:
            return cls.LOW
        if stock <= minimum * 1.5:
            return cls.WARNING
        return cls.OK


class DialogState(Enum):
    CLOSED = "closed"
    EDITING = "editing"
    SUBMITTING = "submitting"
    ERROR = "error"
    CLOSING = "closing"

    @property
    def is_open(self):
        return self is not DialogState.CLOSED


_SORT_KEY_LABELS = {
    SortKey.NAME: "Name",
    SortKey.NUMBER: "Part Number",
    SortKey.CATEGORY: "Category",
    SortKey.COST: "Unit Cost",
    SortKey.STOCK: "Stock",
}
