"""All magic values live here — no inline literals anywhere else."""

# Remote model backends
BACKEND_GEMINI = "gemini"
BACKEND_CLAUDE = "claude"
BACKEND_OPENAI = "openai"
GEMINI_MODEL = "gemini-2.5-flash"
CLAUDE_VISION_MODEL = "claude-opus-4-6"
OPENAI_VISION_MODEL = "gpt-4o"
CLAUDE_MAX_TOKENS = 2048

# Retry policy defaults. Jitter is added on top of the exponential delay.
DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_BASE_DELAY_MS = 2000
MAX_JITTER_MS = 1000

# Failure classification: upstream overload / unavailability is worth a retry.
TRANSIENT_STATUS_CODES = frozenset({503, 529})
TRANSIENT_MARKERS = ("503", "overloaded", "unavailable")

# Image fetch
DEFAULT_FETCH_TIMEOUT: float = 30.0
DEFAULT_MIME_TYPE = "application/octet-stream"
DATA_URI_SCHEME = "data:"
DATA_URI_BASE64_MARKER = ";base64"

# Languages
DEFAULT_LANGUAGE = "english"

# Prompts
PROBE_PROMPT = "Hello, are you working?"
TEXT_PROMPT = "You are a medical professional. {prompt} Provide the response in {language} language."
IMAGE_PROMPT = (
    "You are a medical professional analyzing an X-ray image. "
    "Please provide a detailed analysis based on the following prompt: {prompt}. {directive}"
)
LANGUAGE_DIRECTIVE = "Provide the analysis in {language} language."
TRANSLATE_PROMPT = "Translate the following medical analysis to {language}: {analysis}"

# Log messages
MSG_STARTING = "Starting X-ray analysis service…"
MSG_BACKEND = "Using %s backend (%s)"
MSG_PROBE_OK = "Analysis service reachable"
MSG_PROBE_EMPTY = "Analysis service answered the probe with no response"
MSG_PROBE_FAILED = "Connectivity check failed"
MSG_RETRYING = "Retrying after %dms (attempt %d/%d)"
MSG_RETRIES_EXHAUSTED_LOG = "Giving up after %d attempts"
MSG_FETCHING = "Fetching image %s"
MSG_REQUEST = "→ %s request (%s)"
MSG_RESPONSE = "✓ Analysis received (%d chars)"
MSG_UNKNOWN_LANGUAGE = "Unsupported language %r, answering in English"
MSG_ANALYSIS_FAILED = "Analysis failed"

# User-facing error messages
MSG_SERVICE_UNAVAILABLE = (
    "The AI service is temporarily unavailable. We tried multiple times but the service "
    "is experiencing high load. Please try again in a few minutes."
)
MSG_RETRIES_EXHAUSTED = (
    "Maximum retries reached. The service is currently unavailable. Please try again later."
)
MSG_UNEXPECTED = "An unexpected error occurred while analyzing the image"
MSG_CONNECTIVITY_FAILED = "Failed to connect to the analysis service"
MSG_EMPTY_RESPONSE = "No response from the analysis service"
MSG_FETCH_FAILED = "Failed to fetch image"
MSG_READ_FAILED = "Failed to read image file"
MSG_ENCODE_FAILED = "Failed to convert image to base64"
MSG_IMAGE_REQUIRED = "Please upload an X-ray image first"
MSG_PROMPT_REQUIRED = "Please enter a prompt"
MSG_NOTHING_TO_TRANSLATE = "There is no analysis to translate"
