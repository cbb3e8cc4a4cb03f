# expense_backend/categorizer.py
"""
Gemini-backed expense categorizer.

The model answers in free text; ``normalize_category`` maps that answer onto
the closed label set so only known categories reach the store.
"""
import logging
import re
from difflib import get_close_matches

import google.generativeai as genai

from .errors import ClassifierError

logger = logging.getLogger("expense-backend.classifier")

CATEGORIES = ("Food", "Shopping", "Bills", "Other")
FALLBACK_CATEGORY = "Other"
SYSTEM_INSTRUCTION = "Categorize the expense as Food/Shopping/Bills/Other"


def normalize_category(cat):
    """Map free text onto CATEGORIES, falling back to "Other"."""
    if not cat:
        return FALLBACK_CATEGORY
    cat = str(cat).strip().strip(".!\"'*` ")
    for c in CATEGORIES:
        if cat.lower() == c.lower():
            return c

    # "Category: Food", "This is Bills."
    words = {w.lower() for w in re.findall(r"[A-Za-z]+", cat)}
    found = [c for c in CATEGORIES if c.lower() in words]
    if len(found) == 1:
        return found[0]

    match = get_close_matches(cat.title(), CATEGORIES, n=1, cutoff=0.75)
    return match[0] if match else FALLBACK_CATEGORY


class GeminiClassifier:
    def __init__(self, api_key=None, model_name="gemini-1.5-flash"):
        self.api_key = api_key
        self.model_name = model_name

    def _model(self):
        # genai holds a single process-wide key; set this instance's key on
        # every call so two classifiers with different keys do not share one.
        genai.configure(api_key=self.api_key)
        return genai.GenerativeModel(
            model_name=self.model_name,
            system_instruction=SYSTEM_INSTRUCTION,
        )

    def ask(self, description):
        """Send one description to the model and return its trimmed answer."""
        try:
            response = self._model().generate_content(description)
        except Exception as e:
            logger.exception("Gemini request failed")
            raise ClassifierError() from e

        if not response.parts:
            logger.error(f"Gemini returned an empty or blocked response: {response}")
            raise ClassifierError()
        return response.text.strip()

    def categorize(self, description):
        """
        Returns one of CATEGORIES for the description.
        Blank descriptions are "Other" without a model call.
        """
        if not description or len(str(description).strip()) < 2:
            return FALLBACK_CATEGORY

        raw = self.ask(str(description))
        category = normalize_category(raw)
        logger.debug(f"Gemini answer {raw!r} -> {category}")
        return category
