import os

from dotenv import load_dotenv

load_dotenv()

# Audit + exports
AUDIT_LOG_PATH = os.getenv("AUDIT_LOG_PATH", "logs/audit.jsonl").strip()
EXPORT_DIR = os.getenv("EXPORT_DIR", "exports").strip()

# Report heading used by the markdown and PDF exports
REPORT_TITLE = os.getenv("REPORT_TITLE", "Contract Risk Analysis").strip()
