"""Session dataclass for lf-simple."""

from dataclasses import dataclass, field

VALID_STATES = {"idle", "launching", "active", "closing"}


@dataclass
class Session:
    """Represents one run of lf inside the editor.

    Attributes:
        origin_window: Window that was current when the session started
        selection_file: File lf writes the selected paths to on exit
        start_dir: Directory lf was started in
        buffer_snapshot: Paths of the readable file buffers open at start
        origin_buffer: Buffer shown in origin_window before the session
            (embedded variant only, None when floating)
        display_buffer: Terminal buffer hosting lf
        display_window: Window showing display_buffer
        job_id: Terminal job id once lf has been spawned
        state: Session state - one of "idle", "launching", "active", "closing"
    """

    origin_window: int
    selection_file: str
    start_dir: str
    buffer_snapshot: frozenset[str] = field(default_factory=frozenset)
    origin_buffer: int | None = None
    display_buffer: int | None = None
    display_window: int | None = None
    job_id: int | None = None
    state: str = "launching"

    def __post_init__(self) -> None:
        """Validate session state."""
        if self.state not in VALID_STATES:
            raise ValueError(
                f"Invalid state: {self.state}. Must be one of {VALID_STATES}"
            )
        self.buffer_snapshot = frozenset(self.buffer_snapshot)
