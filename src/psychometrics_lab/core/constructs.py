"""
Example constructs a student can start from.
"""

from numpy.random import Generator

from psychometrics_lab.core.data_models import ConstructDefinition

EXAMPLE_CONSTRUCTS: tuple[ConstructDefinition, ...] = (
    ConstructDefinition(
        name="Burnout",
        description=(
            "A state of physical, emotional and mental exhaustion caused by "
            "long-term stress at work. It shows as cynicism, a sense of "
            "ineffectiveness and distancing oneself from duties."
        ),
    ),
    ConstructDefinition(
        name="Social anxiety",
        description=(
            "A persistent fear of social situations in which one is exposed "
            "to evaluation by others, including the fear of being "
            "criticised, ridiculed or rejected."
        ),
    ),
    ConstructDefinition(
        name="Emotional intelligence",
        description=(
            "The ability to recognise, understand and manage one's own "
            "emotions and those of others. It covers empathy, "
            "self-regulation and social skills."
        ),
    ),
    ConstructDefinition(
        name="Procrastination",
        description=(
            "The habitual, voluntary postponing of intended tasks despite "
            "expecting to be worse off for the delay."
        ),
    ),
    ConstructDefinition(
        name="Fear of failure",
        description=(
            "An irrational and persistent fear of failing that paralyses "
            "action and keeps a person from taking on challenges."
        ),
    ),
    ConstructDefinition(
        name="Gratitude",
        description=(
            "A stable tendency to notice and appreciate the positive "
            "aspects of life and the good received from other people."
        ),
    ),
)


def random_example_construct(rng: Generator) -> ConstructDefinition:
    return EXAMPLE_CONSTRUCTS[int(rng.integers(0, len(EXAMPLE_CONSTRUCTS)))]
