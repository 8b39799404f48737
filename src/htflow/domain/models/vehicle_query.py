"""VehicleQuery model - the vehicle and part a user asks about"""

from dataclasses import dataclass


@dataclass(frozen=True)
class VehicleQuery:
    """Vehicle details and the part to replace"""

    year: str
    make: str
    model: str
    part: str

    def __post_init__(self):
        """Normalize surrounding whitespace"""
        for name in ("year", "make", "model", "part"):
            value = getattr(self, name)
            object.__setattr__(self, name, "" if value is None else str(value).strip())

    @property
    def is_complete(self) -> bool:
        """Check that every field was filled in"""
        return all((self.year, self.make, self.model, self.part))

    @property
    def vehicle(self) -> str:
        return f"{self.year} {self.make} {self.model}"
