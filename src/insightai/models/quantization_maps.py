"""
Quantization Maps for Recommendation Ranking

Normalizes GGUF quantization labels and ranks them by output quality.
Catalog entries label their quantization loosely ("q4_k_m", "Q4KM", "Q5_K_S"),
so every lookup goes through normalize_quant_type() first.
"""

import re
from typing import Optional

# GGUF quantization types known to the catalog, most specific first
GGUF_QUANT_TYPES = (
    "Q4_K_M", "Q4_K_S", "Q5_K_M", "Q5_K_S", "Q3_K_L", "Q3_K_M", "Q3_K_S",
    "Q2_K", "Q6_K", "Q8_K", "Q4_0", "Q4_1", "Q5_0", "Q5_1", "Q8_0",
    "IQ4_XS", "IQ4_NL", "IQ3_M", "IQ3_S", "IQ3_XXS", "IQ2_XS", "IQ2_XXS",
    "F16", "BF16", "F32",
)

# Ranking bonus by quality: Q4_K_M is the sweet spot, then Q5, Q4, Q3
QUANT_QUALITY_BONUS = {
    "Q4_K_M": 15,
    "Q5": 12,
    "Q4": 8,
    "Q3": 4,
}

# Tokens in a model name that describe its size or quantization
_SIZE_TOKEN = re.compile(r"^(\d+x)?\d+(\.\d+)?[bmk]$|^e\d+b$", re.IGNORECASE)
_QUANT_TOKEN = re.compile(r"^(i?q\d[\w]*|f16|bf16|f32|fp16|\d+-?bit|gguf)$", re.IGNORECASE)


def normalize_quant_type(quant_type: Optional[str]) -> Optional[str]:
    """
    Normalize a quantization label to its canonical GGUF spelling.

    Args:
        quant_type: Quantization label (e.g., "q4_k_m", "Q4KM")

    Returns:
        Canonical label (e.g., "Q4_K_M"), the upper-cased input if it is not
        a known GGUF type, or None for an empty label
    """
    if not quant_type:
        return None
    quant_upper = quant_type.upper().strip()

    # Direct lookup
    if quant_upper in GGUF_QUANT_TYPES:
        return quant_upper

    # Try without underscore variations
    for known in GGUF_QUANT_TYPES:
        if known.replace("_", "") == quant_upper.replace("_", ""):
            return known

    return quant_upper


def quantization_bonus(quant_type: Optional[str]) -> int:
    """
    Ranking bonus for a quantization label.

    Args:
        quant_type: Quantization label from a model descriptor

    Returns:
        15 for Q4_K_M, 12 for any Q5, 8 for other Q4, 4 for Q3, else 0
    """
    quant = normalize_quant_type(quant_type)
    if not quant:
        return 0
    if quant == "Q4_K_M":
        return QUANT_QUALITY_BONUS["Q4_K_M"]
    for prefix in ("Q5", "Q4", "Q3"):
        if quant.startswith(prefix):
            return QUANT_QUALITY_BONUS[prefix]
    return 0


def strip_size_and_quant(name: str) -> str:
    """
    Reduce a model name to its base name for de-duplication.

    Size tokens ("8B", "8x7B", "E4B") and quantization tokens ("Q4_K_M",
    "4bit") are dropped and the remainder is case-folded, so
    "Llama 3.1 8B Instruct (Q4_K_M)" and "Llama 3.1 70B Instruct" share the
    base name "llama 3.1 instruct".
    """
    tokens = re.split(r"[\s()\[\]]+", name)
    kept = [t for t in tokens if t and not _SIZE_TOKEN.match(t) and not _QUANT_TOKEN.match(t)]
    return " ".join(kept).casefold().strip(" -_")
