"""
NEAT Innovation Registry Module

This module implements the InnovationRegistry class, the ledger
that gives links a stable identity across genomes.

Classes:
    InnovationRegistry: Maps (source, destination) node pairs to innovation numbers
"""

from itertools import count

class InnovationRegistry:
    """
    Tracks every link ever created by the genomes of one lineage.
    Ensures the same (source, destination) pair always gets the same
    innovation number, so that crossover and compatibility checks can
    align the genes of different genomes.

    The registry is append-only. One instance is created per population
    (or per algorithm family) and handed to each genome it spawns, which
    lets independent runs and tests use isolated registries.

    Public Methods:
        get_innovation_number(source_id, dest_id): Innovation number for a link
        describe(innovation):                      The canonical "source dest" key
    """

    def __init__(self):
        self._next_innovation_number = count(0)

        # For each link ever created, map its endpoints to its innovation number
        self._innovation_numbers: dict[tuple[int, int], int] = {}

        # Canonical "source-id destination-id" string, indexed by innovation number
        self._descriptions: list[str] = []

    def get_innovation_number(self, source_id: int, dest_id: int) -> int:
        """
        Get innovation number for a link, identified by its endpoints.
        Returns existing innovation number if this link was created
        before, otherwise assigns a new innovation number.

        Parameters:
            source_id: node ID for the 'from' end of the link
            dest_id:   node ID for the 'to'   end of the link

        Returns:
            link ID (a.k.a. innovation number)
        """
        key = (source_id, dest_id)

        # This is a new link
        if key not in self._innovation_numbers:
            self._innovation_numbers[key] = next(self._next_innovation_number)
            self._descriptions.append(f"{source_id} {dest_id}")

        return self._innovation_numbers[key]

    def describe(self, innovation: int) -> str:
        """
        Return the "source-id destination-id" key registered under an innovation number.
        """
        if not 0 <= innovation < len(self._descriptions):
            raise KeyError(f"Unknown innovation number {innovation}")
        return self._descriptions[innovation]

    def __contains__(self, key: tuple[int, int]) -> bool:
        return key in self._innovation_numbers

    def __len__(self) -> int:
        return len(self._descriptions)
