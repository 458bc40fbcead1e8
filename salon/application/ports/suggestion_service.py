from __future__ import annotations

from abc import ABC, abstractmethod

from salon.domain.entities.suggestion import SlotSuggestion, SuggestionRequest


class SuggestionServicePort(ABC):
    @abstractmethod
    def suggest(self, request: SuggestionRequest) -> list[SlotSuggestion]:
        """
        Propose candidate (stylist, start, end) slots for the requested date.

        Requirements:
        - Each candidate lies inside one of its stylist's windows and does not
          overlap that stylist's existing appointments
        - At most five candidates (callers still cap the list)
        - Empty list when nothing fits; that is not an error

        Raises:
            SuggestionServiceError: the service could not answer at all
        """
        raise NotImplementedError
