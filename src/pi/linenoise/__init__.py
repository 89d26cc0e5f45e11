"""pi-linenoise: readline-style line editing for terminals."""

# Colours
from pi.linenoise.colors import RGB, ColorSupport, closest_color, detect_color_support

# Completion
from pi.linenoise.completion import CompletionCallback, CompletionEngine, CompletionResult

# Configuration
from pi.linenoise.config import WRITE_LOG_ENV, LineNoiseOptions

# Byte decoding
from pi.linenoise.decoder import ByteDecoder, decode_character, normalize_encoding

# Edit state
from pi.linenoise.edit_state import EditSnapshot, EditState

# Editor
from pi.linenoise.editor import LineEditor, LineNoise, LineResult, Mode

# Errors
from pi.linenoise.errors import (
    DeviceError,
    EncodingError,
    EndOfInput,
    Interrupted,
    InvalidContinuationByte,
    InvalidLeadByte,
    LineNoiseError,
    NotATTYError,
    StrayContinuationByte,
    TruncatedCharacter,
    UndecodableSequence,
    UnencodableText,
    UnsupportedEncoding,
)

# Escape sequences
from pi.linenoise.escape import EscapeCommand, parse_escape_sequence

# Hints
from pi.linenoise.hints import HintEngine, HintsCallback

# History
from pi.linenoise.history import History

# Keybindings
from pi.linenoise.keybindings import DEFAULT_KEYBINDINGS, EditAction, KeybindingsManager

# Rendering
from pi.linenoise.renderer import Renderer

# Terminal
from pi.linenoise.terminal import (
    FileDescriptorInput,
    FileDescriptorOutput,
    LineInput,
    LineOutput,
    raw_mode,
    with_raw_mode,
)

# Utilities
from pi.linenoise.utils import visible_width

__all__ = [
    # Colours
    "RGB",
    "ColorSupport",
    "closest_color",
    "detect_color_support",
    # Completion
    "CompletionCallback",
    "CompletionEngine",
    "CompletionResult",
    # Configuration
    "WRITE_LOG_ENV",
    "LineNoiseOptions",
    # Byte decoding
    "ByteDecoder",
    "decode_character",
    "normalize_encoding",
    # Edit state
    "EditSnapshot",
    "EditState",
    # Editor
    "LineEditor",
    "LineNoise",
    "LineResult",
    "Mode",
    # Errors
    "DeviceError",
    "EncodingError",
    "EndOfInput",
    "Interrupted",
    "InvalidContinuationByte",
    "InvalidLeadByte",
    "LineNoiseError",
    "NotATTYError",
    "StrayContinuationByte",
    "TruncatedCharacter",
    "UndecodableSequence",
    "UnencodableText",
    "UnsupportedEncoding",
    # Escape sequences
    "EscapeCommand",
    "parse_escape_sequence",
    # Hints
    "HintEngine",
    "HintsCallback",
    # History
    "History",
    # Keybindings
    "DEFAULT_KEYBINDINGS",
    "EditAction",
    "KeybindingsManager",
    # Rendering
    "Renderer",
    # Terminal
    "FileDescriptorInput",
    "FileDescriptorOutput",
    "LineInput",
    "LineOutput",
    "raw_mode",
    "with_raw_mode",
    # Utilities
    "visible_width",
]
