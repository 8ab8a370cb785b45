"""
Text annotation module.
Wraps a part-of-speech tagger/lemmatizer behind a small interface and builds token frequency tables.
"""

# Protocol describes any compliant annotation backend
from typing import Callable, Dict, List, Mapping, Optional, Protocol

import pandas as pd

# spaCy supplies tagging and lemmatization for the default backend
import spacy

from loguru import logger

from .models import Token

TOKEN_COLUMNS = ['doc_id', 'token_id', 'token', 'upos', 'lemma']

# Trained pipelines per language id
SPACY_MODELS: Dict[str, str] = {
	'en': 'en_core_web_sm',
	'english': 'en_core_web_sm',
	'de': 'de_core_news_sm',
	'german': 'de_core_news_sm',
	'fr': 'fr_core_news_sm',
	'french': 'fr_core_news_sm',
	'es': 'es_core_news_sm',
	'spanish': 'es_core_news_sm',
}


class AnnotationError(RuntimeError):
	"""Raised when the annotation backend cannot be loaded."""


class Annotator(Protocol):
	def annotate(self, text: str, doc_id: str = '') -> List[Token]:
		...


class SpacyAnnotator:
	"""
	Annotator backed by a spaCy pipeline.
	Only the tagger, attribute ruler and lemmatizer are needed, so parser and NER are disabled.
	"""

	def __init__(self, language: str = 'en', nlp: Optional[Callable] = None):
		self.language = language
		if nlp is not None:  # injected pipeline (tests, custom models)
			self._nlp = nlp
			return

		model_name = SPACY_MODELS.get(language.lower(), language)  # allow a package name directly
		try:
			self._nlp = spacy.load(model_name, disable=['parser', 'ner'])
		except OSError as e:
			raise AnnotationError(
				f"spaCy model '{model_name}' for language '{language}' is not installed "
				f"(python -m spacy download {model_name})"
			) from e
		logger.info(f"[Annotator] spaCy model {model_name} loaded")

	def annotate(self, text: str, doc_id: str = '') -> List[Token]:
		"""Tag and lemmatize one document; whitespace tokens are skipped."""
		doc = self._nlp(text)
		tokens: List[Token] = []
		for tok in doc:
			if tok.is_space:
				continue
			tokens.append(Token(
				doc_id=doc_id,
				token_id=len(tokens) + 1,
				token=tok.text,
				upos=tok.pos_,
				lemma=tok.lemma_ or tok.text,
			))
		return tokens


def annotate_documents(annotator: Annotator, documents: Mapping[str, str]) -> pd.DataFrame:
	"""
	Annotate every document and return one flat token table.
	Document order and token order within each document are preserved.
	"""
	rows = []
	annotated = 0
	for doc_id, text in documents.items():
		if not isinstance(text, str) or not text.strip():
			logger.debug(f"[Annotator] Skipping empty document {doc_id}")
			continue
		annotated += 1
		rows.extend(
			(t.doc_id, t.token_id, t.token, t.upos, t.lemma)
			for t in annotator.annotate(text, doc_id=str(doc_id))
		)
	logger.info(f"[Annotator] Annotated {annotated} of {len(documents)} documents into {len(rows)} tokens")
	return pd.DataFrame(rows, columns=TOKEN_COLUMNS)


def term_frequencies(tokens: pd.DataFrame, upos: Optional[str] = 'NOUN', term: str = 'lemma') -> pd.DataFrame:
	"""
	Frequency table of a term column, optionally restricted to one tag.
	Sorted by descending frequency; ties keep first-appearance order.
	"""
	subset = tokens if upos is None else tokens[tokens['upos'] == upos]
	freq = subset.groupby(term, sort=False).size()
	table = freq.reset_index(name='freq').rename(columns={term: 'key'})
	total = table['freq'].sum()
	table['freq_pct'] = 100 * table['freq'] / total if total else 0.0
	return table.sort_values('freq', ascending=False, kind='mergesort').reset_index(drop=True)


def top_terms(table: pd.DataFrame, k: int = 20) -> pd.DataFrame:
	"""Truncate a frequency table for display."""
	if k <= 0:
		raise ValueError("k must be positive")
	return table.head(k)
