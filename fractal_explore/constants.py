"""Fixed defaults shared by the detector, the config layer and the CLI."""

DEFAULT_PORT = 3434
DEFAULT_HOST = "localhost"

CACHE_DIR = ".fractal-explore"

MANIFEST_NAME = "package.json"

# Source files a component scanner would consider
SUPPORTED_EXTENSIONS: tuple[str, ...] = (".tsx", ".jsx", ".ts", ".js")

# Default scan roots for a project config
DEFAULT_COMPONENT_PATHS: tuple[str, ...] = (
    "src/components",
    "components",
    "src/ui",
    "ui",
)

# Probed by the detector, in reporting order
COMPONENT_DIR_CANDIDATES: tuple[str, ...] = (
    "src/components",
    "src/ui",
    "src/lib",
    "components",
    "ui",
    "lib",
    "src/pages/components",
    "app/components",
)

FALLBACK_COMPONENT_DIR = "src/components"

DEFAULT_EXCLUDE_PATTERNS: tuple[str, ...] = (
    "**/node_modules/**",
    "**/dist/**",
    "**/build/**",
    "**/*.test.*",
    "**/*.spec.*",
    "**/*.stories.*",
)

# ── Marker dependencies ──
REACT_MARKER = "react"

# Build tool label -> marker dependency, highest priority first
BUILD_TOOL_MARKERS: tuple[tuple[str, str], ...] = (
    ("vite", "vite"),
    ("webpack", "webpack"),
    ("next", "next"),
    ("cra", "react-scripts"),
)

BUILD_TOOL_UNKNOWN = "unknown"

BUILD_TOOLS: tuple[str, ...] = tuple(label for label, _ in BUILD_TOOL_MARKERS) + (
    BUILD_TOOL_UNKNOWN,
)

STATIC_TYPING_MARKERS: tuple[str, ...] = ("typescript", "@types/react")
