"""
Runtime configuration.

Values come from the environment. Engine objects accept explicit
arguments; these are only defaults.
"""

import os
from pathlib import Path
from typing import Optional

# Localization
DEFAULT_LOCALE = os.getenv("WX_EXPLAIN_LOCALE", "zh-CN")
FALLBACK_LOCALE = "en"

# Remark text is clipped to this many characters in field explanations
REMARK_CLIP_LENGTH = int(os.getenv("WX_EXPLAIN_REMARK_CLIP", "120"))

# Logging Configuration
LOG_LEVEL = os.getenv("WX_EXPLAIN_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Bundled data
PACKAGE_DIR = Path(__file__).parent
LOCALES_DIR = PACKAGE_DIR / "i18n" / "locales"
BUNDLED_LEXICON_DIR = PACKAGE_DIR / "lexicon" / "data"


def get_lexicon_dir() -> Path:
    """Get the lexicon directory, honouring WX_EXPLAIN_LEXICON_DIR."""
    override: Optional[str] = os.getenv("WX_EXPLAIN_LEXICON_DIR")
    if override:
        return Path(override)
    return BUNDLED_LEXICON_DIR
