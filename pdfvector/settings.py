import os

# Raise recoverable content-stream errors instead of reporting and skipping.
STRICT = os.environ.get("PDFVECTOR_STRICT", "").lower() in ("1", "true", "yes")
