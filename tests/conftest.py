"""
Pytest configuration and fixtures
"""
import pytest


LECTURE_TEXT = (
    "Photosynthesis is the process plants use to turn light into chemical energy. "
    "Chlorophyll in the leaves absorbs light, mostly in the red and blue wavelengths. "
    "The absorbed energy splits water molecules and releases oxygen as a by-product. "
    "However, the sugar itself is built later, in the Calvin cycle, using carbon dioxide from the air. "
    "The Calvin cycle runs in the stroma of the chloroplast and needs the energy carriers made earlier. "
    "Temperature and light intensity both limit how fast photosynthesis can run. "
    "It is important to remember that plants also respire, so they release carbon dioxide at night. "
    "Farmers therefore control light and temperature in greenhouses to raise crop yields. "
    "A significant share of the oxygen in the atmosphere comes from photosynthesis in the oceans. "
    "Tiny algae near the surface of the oceans carry out much of this work. "
    "Without photosynthesis, food chains on land and in water would collapse. "
    "Scientists study the chloroplast closely to design crops that use light more efficiently."
)


def numbered_words(count, prefix="term"):
    return " ".join(f"{prefix}{i}" for i in range(count))


def many_sentences(count=60):
    """Sentences of 5 to 20 words drawn from a small repeating vocabulary."""
    vocab = ["river", "delta", "sediment", "flood", "channel", "plain", "water", "erosion", "basin", "current", "bank"]
    out = []
    for i in range(count):
        n = 5 + (i * 7) % 16
        out.append(" ".join(vocab[(i + j * 3) % len(vocab)] for j in range(n)) + ".")
    return " ".join(out)


@pytest.fixture
def lecture_text():
    return LECTURE_TEXT


@pytest.fixture(autouse=True)
def no_gemini_key(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
