"""
Data models for the Bechdel analysis.
Defines the outcome vocabulary and the small records shared between pipeline stages.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass  # auto-generates __init__, __repr__, etc.
# Import typing helpers for precise and self-documenting types
from typing import Dict  # mappings keyed by outcome

# Tables travel between stages as pandas DataFrames
import pandas as pd  # tabular data


# Outcome labels as they appear in the clean_test column of the movie table
NOWOMEN = 'nowomen'  # fewer than two named women
NOTALK = 'notalk'  # women never talk to each other
MEN = 'men'  # women only talk about a man
DUBIOUS = 'dubious'  # contested outcome, always FAIL
OK = 'ok'  # passes all three criteria

OUTCOMES = (NOWOMEN, NOTALK, MEN, DUBIOUS, OK)

# Ordinal rating per outcome; -1 marks dubious and is left out of ordinal analysis
RATING_BY_OUTCOME: Dict[str, int] = {
	DUBIOUS: -1,
	NOWOMEN: 0,
	NOTALK: 1,
	MEN: 2,
	OK: 3,
}
DUBIOUS_RATING = RATING_BY_OUTCOME[DUBIOUS]

PASS = 'PASS'
FAIL = 'FAIL'


@dataclass
class Token:
	"""
	One annotated token of a plot summary.
	doc_id links back to the movie the text came from.
	"""
	doc_id: str  # source document identifier
	token_id: int  # 1-based position within the document
	token: str  # surface form as it appears in the text
	upos: str  # universal part-of-speech tag (NOUN, ADJ, ...)
	lemma: str  # dictionary form


@dataclass
class ReconciliationTally:
	"""
	Agreement counts between two rating sources for the same movies.
	"""
	equal: int = 0  # both sources agree
	second_greater: int = 0  # second source rates higher
	first_greater: int = 0  # first source rates higher

	@property
	def total(self) -> int:
		return self.equal + self.second_greater + self.first_greater


@dataclass
class VocabularyReport:
	"""
	Vocabulary tables for the plot summaries of one binary outcome group.
	"""
	outcome: str  # PASS or FAIL
	documents: int  # number of plot summaries annotated
	nouns: pd.DataFrame  # lemma frequency table of nouns
	keywords: pd.DataFrame  # RAKE keywords
	phrases: pd.DataFrame  # phrase-machine noun phrases
