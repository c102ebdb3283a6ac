import logging
import random
from typing import List, Optional

from .models import ConfigurationError, Question, QuestionBank

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_SIZE = 15


class QuestionSampler:
    """
    Draws a fixed-size, order-randomized subset of the question bank for each session.

    The bank/sample-size check runs at construction so a misconfigured deployment
    fails at startup rather than on the first session.
    """
    def __init__(self, bank: QuestionBank, k: int = DEFAULT_SAMPLE_SIZE, rng: Optional[random.Random] = None):
        if k < 1:
            raise ConfigurationError(f"Sample size must be at least 1, got {k}")
        if len(bank) < k:
            raise ConfigurationError(
                f"Question bank has {len(bank)} questions but the sample size is {k}"
            )
        self.bank = bank
        self.k = k
        self.rng = rng or random.Random()

    def sample(self) -> List[Question]:
        """Returns k distinct questions in random order."""
        questions = self.rng.sample(self.bank.questions, self.k)
        logger.debug(f"Sampled questions {[q.id for q in questions]}")
        return questions


def sample(bank: QuestionBank, k: int = DEFAULT_SAMPLE_SIZE, rng: Optional[random.Random] = None) -> List[Question]:
    return QuestionSampler(bank, k, rng).sample()
