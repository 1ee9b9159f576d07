"""Domain and infrastructure exceptions."""


class RankingError(Exception):
    """Base exception for ranking domain errors."""

    pass


class AdvisoryFailure(RankingError):
    """Raised when the advisory service cannot produce a valid score.

    Never leaves the advisory scorer: it is converted into a heuristic
    fallback score.
    """

    pass


class PreferencesRequired(RankingError):
    """Raised when ranking is requested for a user with no preferences."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(
            f"User {user_id} has no investment preferences; complete onboarding first"
        )


class NotFoundError(RankingError):
    """Raised when a referenced user or business does not exist."""

    pass


class RepositoryError(Exception):
    """Raised when the backing store fails. Callers may retry."""

    pass
