import os
import tempfile

from dotenv import load_dotenv

load_dotenv()

# Video Configuration
VIDEO_WIDTH = int(os.getenv("VIDEO_WIDTH", "1280"))
VIDEO_HEIGHT = int(os.getenv("VIDEO_HEIGHT", "720"))  # Landscape HD master (16:9)
FPS = int(os.getenv("FPS", "24"))
SCENE_DURATION_SECONDS = int(os.getenv("SCENE_DURATION_SECONDS", "3"))  # 24fps x 3s = 72 frames per scene

# Frame rendering
# Workers > 1 computes frames on a thread pool; frames are still written in order.
RENDER_WORKERS = int(os.getenv("RENDER_WORKERS", "1"))

# Fonts: empty means "search the usual system locations, then fall back to Pillow's default font"
FONT_BOLD = os.getenv("FONT_BOLD", "")
FONT_REGULAR = os.getenv("FONT_REGULAR", "")

# Encoder
# Empty means use the ffmpeg binary bundled with imageio-ffmpeg (the one moviepy uses)
FFMPEG_BINARY = os.getenv("FFMPEG_BINARY", "")

# Output directories
# OUTPUT_DIR holds one <job_id>.mp4 per job plus <job_id>/<platform>.json metadata bundles.
# TEMP_DIR holds the transient per-job frame sequences.
OUTPUT_DIR = os.getenv("OUTPUT_DIR", os.path.join("public", "generated"))
TEMP_DIR = os.getenv("TEMP_DIR", tempfile.gettempdir())
PUBLIC_URL_PREFIX = os.getenv("PUBLIC_URL_PREFIX", "/generated")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
