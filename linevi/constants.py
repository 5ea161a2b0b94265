"""Constants and configuration for the linevi editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Document limits
    MAX_LINES = 512  # Hard capacity of a document

    # Screen layout
    GUTTER_WIDTH = 6  # Marker + 4-digit line number + space
    LINE_NUMBER_WIDTH = 4
    MIN_CONTENT_WIDTH = 8
    MIN_BODY_ROWS = 1
    MIN_SCREEN_ROWS = 4
    MIN_SCREEN_COLS = 10
    RESERVED_ROWS = 2  # Status line + command/message line
    EMPTY_ROW_MARKER = "~"
    CURSOR_LINE_MARKER = ">"
    COMMAND_PROMPT = ":"

    # Editing
    TAB_WIDTH = 2  # Spaces inserted by Tab in insert mode

    # Key code fallbacks for hosts that don't know a symbolic name
    FALLBACK_KEY_CODES = {
        'enter': 10,
        'esc': 27,
        'backspace': 8,
        'tab': 9,
    }

    # Startup
    DEFAULT_FILENAME = "linevi.txt"
    PATH_PROMPT = "vi file path (default {}): "
    FAREWELL_MESSAGE = "bye"

    # File operations
    ATOMIC_SAVE_PREFIX = "."  # Prefix for temporary save files
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files

    # Mode labels
    NORMAL_LABEL = "-- NORMAL --"
    INSERT_LABEL = "-- INSERT --"
    COMMAND_LABEL = "-- COMMAND --"
    NO_NAME_LABEL = "[No Name]"

    # Status messages
    WELCOME_MESSAGE = "Press :help for commands"
    HELP_MESSAGE = "Commands: :w, :w <file>, :q, :q!, :wq, :e <file>, :help, ESC to cancel"
    BUFFER_FULL_MESSAGE = "buffer full"
    TRUNCATED_MESSAGE = "file truncated to {} lines"
    LINE_DELETED_MESSAGE = "line deleted"
    PENDING_DELETE_MESSAGE = "d - waiting for next d"
    CANCELLED_MESSAGE = "command cancelled"
    UNSAVED_QUIT_MESSAGE = "No write since last change (use :q!)"
    NO_FILENAME_MESSAGE = "Specify file name with :w <path>"
    NO_FILENAME_QUIT_MESSAGE = "Specify file name first"
    UNKNOWN_COMMAND_MESSAGE = "Unknown command: {}"
    WRITTEN_MESSAGE = "file written"
    OPENED_MESSAGE = "opened file"
    NEW_FILE_MESSAGE = "new file"
    WRITE_ERROR_MESSAGE = "Error: cannot write {}"
    READ_ERROR_MESSAGE = "Error: cannot read {}"
