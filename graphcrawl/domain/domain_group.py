from dataclasses import dataclass


@dataclass(frozen=True)
class Domain:
    """A hostname group; ids are dense and assigned in first-seen order."""

    name: str
    domain_id: int

    def __str__(self):
        return f"Group {self.domain_id} - {self.name}"
