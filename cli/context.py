"""Shared CLI context with lazy-initialized dependencies."""

from planisphere.auth import StaticAuthProvider
from planisphere.config import PlanisphereConfig
from planisphere.session import CalendarSession
from planisphere.store import EventStore, create_store


class CLIContext:
    """Shared context with lazy-initialized dependencies for CLI commands.

    Usage:
        ctx = CLIContext()
        async with ctx.open_session() as session:
            ...
    """

    def __init__(
        self, verbose: bool = False, quiet: bool = False, user_id: str | None = None
    ):
        """Initialize CLI context.

        Args:
            verbose: If True, enable info logging on the console
            quiet: If True, suppress non-error output
            user_id: Overrides the configured user for write attribution
        """
        self.verbose = verbose
        self.quiet = quiet
        self.user_id = user_id

        # Lazy-loaded dependencies
        self._config: PlanisphereConfig | None = None
        self._store: EventStore | None = None
        self._auth: StaticAuthProvider | None = None

    @property
    def config(self) -> PlanisphereConfig:
        """Get configuration (lazy-loaded)."""
        if self._config is None:
            self._config = PlanisphereConfig.from_env()
        return self._config

    @property
    def store(self) -> EventStore:
        """Get event store (lazy-loaded)."""
        if self._store is None:
            self._store = create_store(self.config)
        return self._store

    @property
    def auth(self) -> StaticAuthProvider:
        """Get auth provider (lazy-loaded)."""
        if self._auth is None:
            self._auth = StaticAuthProvider(self.user_id or self.config.user_id)
        return self._auth

    def open_session(self) -> CalendarSession:
        """New calendar session over the shared store; use with ``async with``."""
        return CalendarSession(self.store, self.auth)


# Global context instance (set by Typer callback)
_ctx: CLIContext | None = None


def get_context() -> CLIContext:
    """Get the current CLI context.

    Raises:
        RuntimeError: If context not initialized
    """
    if _ctx is None:
        raise RuntimeError("CLI context not initialized. This should not happen.")
    return _ctx


def set_context(ctx: CLIContext) -> None:
    """Set the global CLI context."""
    global _ctx
    _ctx = ctx
