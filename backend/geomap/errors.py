"""Errors raised by the boundary pipeline."""


class GeoMapError(Exception):
    """Base class for all boundary pipeline errors."""


class InvalidGeometry(GeoMapError):
    """A group member could not take part in a union."""

    def __init__(self, group_key: str, member_index: int, reason: str = ""):
        self.group_key = group_key
        self.member_index = member_index
        self.reason = reason
        super().__init__(
            f"Union failed for group {group_key} member {member_index}: {reason}"
        )


class EmptyGroup(GeoMapError):
    """Every member of a group failed to union."""

    def __init__(self, group_key: str):
        self.group_key = group_key
        super().__init__(f"No geometry survived for group {group_key}")


class UnknownLevel(GeoMapError):
    """An admin level was requested that has no dataset or does not exist."""

    def __init__(self, level):
        self.level = level
        super().__init__(f"Data for {level} not found")


class RegionNotFound(GeoMapError):
    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Region with adm_cd '{code}' not found")


class InvalidFeature(GeoMapError):
    """A GeoJSON feature could not be turned into a Region."""
