"""
Keyword and phrase extraction module.

Two techniques over an annotated token table:
- RAKE: runs of relevant tokens (e.g. nouns and adjectives) form candidate keywords; each word is
  scored by co-occurrence degree over frequency and a keyword scores the sum of its words.
- Phrase machine: tags are reduced to one letter each and a regular expression over the letter
  string of every document picks out noun phrases.
"""

import re
from collections import Counter, defaultdict
from typing import Callable, Dict, Iterable, List, Tuple, Union

import pandas as pd

from loguru import logger

from .config import DEFAULT_PHRASE_PATTERN

# Single-letter codes per universal POS tag
PHRASE_TAGS: Dict[str, str] = {
	'ADJ': 'A',
	'ADP': 'P',
	'ADV': 'O',
	'AUX': 'O',
	'CCONJ': 'C',
	'DET': 'D',
	'INTJ': 'O',
	'NOUN': 'N',
	'NUM': 'M',
	'PART': 'O',
	'PRON': 'N',
	'PROPN': 'N',
	'PUNCT': 'O',
	'SCONJ': 'C',
	'SYM': 'O',
	'VERB': 'V',
	'X': 'O',
}
OTHER_TAG = 'O'

KEYWORD_COLUMNS = ['keyword', 'ngram', 'freq', 'rake']
PHRASE_COLUMNS = ['keyword', 'ngram', 'freq']

Relevance = Union[Callable[[pd.DataFrame], pd.Series], Iterable[str]]


def _relevance_mask(tokens: pd.DataFrame, relevant: Relevance) -> pd.Series:
	if callable(relevant):
		return relevant(tokens).astype(bool)
	return tokens['upos'].isin(list(relevant))


def _candidate_runs(tokens: pd.DataFrame, mask: pd.Series, term: str) -> List[Tuple[str, ...]]:
	"""Maximal runs of relevant tokens; a run never crosses a document boundary."""
	runs: List[Tuple[str, ...]] = []
	current: List[str] = []
	previous_doc = None
	for doc_id, word, keep in zip(tokens['doc_id'], tokens[term], mask):
		if doc_id != previous_doc:
			if current:
				runs.append(tuple(current))
			current = []
			previous_doc = doc_id
		if keep:
			current.append(str(word).lower())
		elif current:
			runs.append(tuple(current))
			current = []
	if current:
		runs.append(tuple(current))
	return runs


def rake_keywords(
	tokens: pd.DataFrame,
	relevant: Relevance = ('NOUN', 'ADJ'),
	term: str = 'lemma',
	ngram_max: int = 2,
	min_freq: int = 2,
) -> pd.DataFrame:
	"""
	Score keyword candidates with RAKE.

	relevant is either a collection of UPOS tags or a callable returning a boolean mask over
	the token table. degree(w) sums the length of every candidate occurrence containing w,
	so a word co-occurs with itself. Candidates longer than ngram_max or seen fewer than
	min_freq times are left out of the result but still contribute to word scores.
	"""
	if ngram_max <= 0 or min_freq <= 0:
		raise ValueError("ngram_max and min_freq must be positive")
	mask = _relevance_mask(tokens, relevant)
	runs = _candidate_runs(tokens, mask, term)

	word_freq: Counter = Counter()
	word_degree: Counter = Counter()
	for run in runs:
		for word in run:
			word_freq[word] += 1
			word_degree[word] += len(run)
	word_score = {w: word_degree[w] / word_freq[w] for w in word_freq}

	keyword_freq = Counter(runs)
	rows = []
	for run, freq in keyword_freq.items():
		if len(run) > ngram_max or freq < min_freq:
			continue
		rows.append((' '.join(run), len(run), freq, sum(word_score[w] for w in run)))

	table = pd.DataFrame(rows, columns=KEYWORD_COLUMNS)
	table = table.sort_values(['rake', 'freq'], ascending=False, kind='mergesort').reset_index(drop=True)
	logger.info(f"[Keywords] RAKE: {len(runs)} candidate occurrences, {len(table)} keywords kept")
	return table


def as_phrase_tags(upos: Iterable[str]) -> List[str]:
	"""Reduce universal POS tags to the one-letter alphabet used by the phrase grammar."""
	return [PHRASE_TAGS.get(str(tag), OTHER_TAG) for tag in upos]


def match_phrases(letters: Iterable[str], terms: Iterable[str], pattern: str = DEFAULT_PHRASE_PATTERN) -> List[Tuple[int, int, str]]:
	"""
	Match the phrase grammar over one document.
	Returns (start, end, phrase) with end exclusive; matches are leftmost, greedy and
	non-overlapping, as produced by re.finditer.
	"""
	letters = list(letters)
	terms = list(terms)
	if len(letters) != len(terms):
		raise ValueError(f"Got {len(letters)} tags for {len(terms)} terms")
	if any(len(code) != 1 for code in letters):
		raise ValueError("Phrase tags must be single letters")

	regex = re.compile(pattern)
	sequence = ''.join(letters)  # one character per token, so offsets are token positions
	matches = []
	for m in regex.finditer(sequence):
		if m.end() == m.start():
			continue
		matches.append((m.start(), m.end(), ' '.join(terms[m.start():m.end()])))
	return matches


def extract_phrases(
	tokens: pd.DataFrame,
	pattern: str = DEFAULT_PHRASE_PATTERN,
	term: str = 'token',
	min_ngram: int = 1,
	min_freq: int = 3,
) -> pd.DataFrame:
	"""
	Phrase-machine noun phrases across all documents, ranked by frequency.
	Only phrases with ngram > min_ngram and freq > min_freq are returned.
	"""
	freq: Counter = Counter()
	ngram: Dict[str, int] = {}
	by_doc = defaultdict(list)
	for doc_id, tag, word in zip(tokens['doc_id'], tokens['upos'], tokens[term]):
		by_doc[doc_id].append((PHRASE_TAGS.get(str(tag), OTHER_TAG), str(word).lower()))

	for doc_id, pairs in by_doc.items():
		letters = [p[0] for p in pairs]
		words = [p[1] for p in pairs]
		for start, end, phrase in match_phrases(letters, words, pattern):
			freq[phrase] += 1
			ngram[phrase] = end - start

	rows = [(phrase, ngram[phrase], count) for phrase, count in freq.items()]
	table = pd.DataFrame(rows, columns=PHRASE_COLUMNS)
	table = table[(table['ngram'] > min_ngram) & (table['freq'] > min_freq)]
	table = table.sort_values('freq', ascending=False, kind='mergesort').reset_index(drop=True)
	logger.info(f"[Keywords] Phrases: {len(freq)} distinct matches, {len(table)} after ngram>{min_ngram} and freq>{min_freq}")
	return table
