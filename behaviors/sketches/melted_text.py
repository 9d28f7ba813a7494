from __future__ import annotations

"""Melted text.

Words from a short poem are stamped, white on black, into a hidden foreground
buffer. A flow field of particles drifts over the visible canvas; particles
sitting on a stamped word are drawn large and pale, all others small and dark,
so the poem only shows through the particles. The canvas fades a little every
frame, and the foreground is wiped more often the more words it holds.
"""

from typing import Sequence

from behaviors.registry import SketchDef, register
from behaviors.sketch_base import Params, Sketch, SketchSetupError
from params.registry import MELTED_TEXT_PARAMS

POEM_WORDS = (
    "the", "library", "contains", "not", "books",
    "but", "glaciers",
    "the", "glaciers", "are", "upright",
    "silent",
    "as", "perfectly", "ordered", "as", "books", "would", "be",
    "but", "they", "are", "melted",
    "what", "would", "it", "be", "like",
    "to", "live", "in", "a", "library",
    "of", "melted", "books",
    "with", "sentences", "streaming", "over", "the", "floor",
    "and", "all", "the", "punctuation",
    "settled", "to", "the", "bottom", "as", "a", "residue",
    "it", "would", "be", "confusing",
    "unforgivable",
    "a", "great", "adventure",
)

ON_WORD_COLOR = "#EEF8FC"
OFF_WORD_COLOR = "#092734"


class MeltedText(Sketch):
    key = "melted_text"

    def __init__(self, words: Sequence[str] = POEM_WORDS):
        self.words = tuple(w for w in words if w)
        self.word_count = 0

    def setup(self, driver) -> None:
        if not self.words:
            raise SketchSetupError("melted_text: word list is empty")
        if not driver.trail.has_font():
            raise SketchSetupError("melted_text: no font available for the foreground")
        driver.trail.clear("#000000")
        driver.canvas.clear("#FFFFFF")
        self.word_count = 0

    def decay(self, driver, params: Params) -> None:
        driver.canvas.apply_decay(float(params["particleTrailFadeStrength"]))

    def spawn(self, driver, params: Params) -> None:
        fg = driver.trail
        clear_prob = self.word_count / float(params["maxWordCount"])
        if driver.rng.rand() < clear_prob:
            fg.clear("#000000")
            self.word_count = 0

        word = driver.rng.choice(self.words)
        size = float(params["textSize"])
        w, h = fg.text_bounds(word, size)
        x = driver.rng.uniform(0.0, driver.width - w)
        y = driver.rng.uniform(0.0, driver.height - h)
        fg.fill_color("#FFFFFF")
        fg.draw_text(word, x, y + h, size)
        self.word_count += 1

    def particle_target(self, params: Params) -> int:
        return int(params["particleMaxCount"])

    def draw_particle(self, driver, p, on_trail: bool, params: Params) -> None:
        weight = float(params["particleTrailWeight"])
        c = driver.canvas
        if on_trail:
            c.fill_color(ON_WORD_COLOR)
            c.draw_circle(p.x, p.y, 6.0 * weight)
        else:
            c.fill_color(OFF_WORD_COLOR)
            c.draw_circle(p.x, p.y, weight)


def register_melted_text():
    return register(SketchDef(
        "melted_text",
        title="Melted Text",
        factory=MeltedText,
        params=MELTED_TEXT_PARAMS,
        size=(1200, 600),
    ))
