"""
Analysis pipeline module.
Runs cleaning, encoding, aggregation, genre expansion, reconciliation and vocabulary
extraction over one shared movie table.
"""

from dataclasses import dataclass, field  # lightweight containers for results
from pathlib import Path  # figure output paths
from typing import Dict, List, Optional  # type annotations for clarity

import pandas as pd  # tables shared between stages

# Import project modules for data structures and components
from .config import AnalysisConfig  # paths and thresholds
from .data_loader import MovieLoader, coerce_gross  # loading and cleaning
from .ratings import encode_ratings, derive_binary  # rating encoder
from .aggregation import subsets_by_binary, mean_gross_by_rating, top_by_gross, yearly_outcomes  # summaries
from .genres import expand_genres, genre_outcome_counts, filter_display_genres  # genre expansion
from .reconcile import match_movies, tally_agreement, find_near_misses  # cross-dataset checks
from .annotation import Annotator, SpacyAnnotator, annotate_documents, term_frequencies, top_terms  # POS tagging
from .keywords import rake_keywords, extract_phrases  # keyword extraction
from .models import DUBIOUS_RATING, ReconciliationTally, VocabularyReport  # result records
from . import plots  # chart rendering

# Import loguru for console logging
from loguru import logger  # simple structured logger


@dataclass
class GrossSummary:
	mean_by_rating: pd.Series  # mean coerced gross per ordinal rating
	top: pd.DataFrame  # top-N movies by gross
	gross_by_outcome: Dict[str, pd.Series]  # coerced gross per PASS/FAIL subset


@dataclass
class AnalysisResult:
	movies: pd.DataFrame  # cleaned and encoded table
	yearly: pd.DataFrame  # yearly PASS/FAIL counts
	gross: GrossSummary
	genre_counts: pd.DataFrame  # counts for every genre
	reconciliation: Optional[ReconciliationTally] = None
	near_misses: Optional[pd.DataFrame] = None
	vocabulary: Dict[str, VocabularyReport] = field(default_factory=dict)
	figures: List[Path] = field(default_factory=list)


class BechdelAnalysis:
	"""
	High-level API over the analysis stages.
	The spaCy annotator is created lazily so table-only stages never load a language model.
	"""
	def __init__(self, config: Optional[AnalysisConfig] = None, annotator: Optional[Annotator] = None):
		self.config = config or AnalysisConfig()  # defaults when not configured
		self.loader = MovieLoader(self.config.drop_columns)  # cleaning rules
		self._annotator = annotator  # injected backend or None

	@property
	def annotator(self) -> Annotator:
		if self._annotator is None:
			logger.info(f"[Pipeline] Loading annotator for language '{self.config.language}'")
			self._annotator = SpacyAnnotator(self.config.language)
		return self._annotator

	def prepare(self, raw: Optional[pd.DataFrame] = None) -> pd.DataFrame:
		"""Load (unless given), clean and encode the movie table."""
		cfg = self.config
		if raw is None:
			raw = self.loader.load_csv(cfg.movies_path)
		movies = self.loader.clean(raw)
		movies = encode_ratings(movies, cfg.label_column, on_unknown=cfg.on_unknown_outcome)
		movies = derive_binary(movies, cfg.label_column, cfg.binary_column)
		logger.info(f"[Pipeline] Prepared {len(movies)} movies")
		return movies

	def gross_summary(self, movies: pd.DataFrame) -> GrossSummary:
		cfg = self.config
		by_outcome = {
			outcome: coerce_gross(subset[cfg.gross_column])
			for outcome, subset in subsets_by_binary(movies, cfg.binary_column).items()
		}
		return GrossSummary(
			mean_by_rating=mean_gross_by_rating(movies, cfg.gross_column),
			top=top_by_gross(movies, cfg.top_n, cfg.gross_column),
			gross_by_outcome=by_outcome,
		)

	def genre_summary(self, movies: pd.DataFrame) -> pd.DataFrame:
		cfg = self.config
		expanded = expand_genres(movies, cfg.genre_column, cfg.title_column, cfg.binary_column, cfg.genre_delimiter)
		return genre_outcome_counts(expanded)

	def reconcile(self, movies: pd.DataFrame, second: Optional[pd.DataFrame] = None):
		"""
		Compare our ordinal ratings with a second source.
		Dubious movies carry no ordinal rating and are left out before matching.
		"""
		cfg = self.config
		if second is None:
			if cfg.ratings_path is None:
				logger.info("[Pipeline] No second rating source configured; skipping reconciliation")
				return None, None
			second = self.loader.load_csv(cfg.ratings_path)
		ordinal = movies[(movies['rating'] != DUBIOUS_RATING).fillna(False)]
		matched = match_movies(
			ordinal, second, cfg.title_column, cfg.year_column,
			first_rating='rating', second_rating=cfg.second_rating_column,
		)
		near = find_near_misses(ordinal, second, cfg.title_column, cfg.year_column, score_cutoff=cfg.near_miss_cutoff)
		return tally_agreement(matched), near

	def vocabulary(self, movies: pd.DataFrame) -> Dict[str, VocabularyReport]:
		"""Annotate plot summaries per binary outcome and extract nouns, keywords and phrases."""
		cfg = self.config
		reports: Dict[str, VocabularyReport] = {}
		for outcome, subset in subsets_by_binary(movies, cfg.binary_column).items():
			documents = {f"{outcome}-{i}": text for i, text in zip(subset.index, subset[cfg.plot_column])}
			tokens = annotate_documents(self.annotator, documents)
			reports[outcome] = VocabularyReport(
				outcome=outcome,
				documents=len(documents),
				nouns=term_frequencies(tokens, upos='NOUN', term='lemma'),
				keywords=rake_keywords(tokens, cfg.relevant_upos, 'lemma', cfg.rake_ngram_max, cfg.rake_min_freq),
				phrases=extract_phrases(tokens, cfg.phrase_pattern, 'token', cfg.phrase_min_ngram, cfg.phrase_min_freq),
			)
			logger.info(
				f"[Pipeline] {outcome}: {len(documents)} plots, {len(reports[outcome].nouns)} nouns, "
				f"{len(reports[outcome].keywords)} keywords, {len(reports[outcome].phrases)} phrases"
			)
		return reports

	def render(self, result: AnalysisResult) -> List[Path]:
		"""Write every chart for a finished analysis."""
		cfg = self.config
		outdir = Path(cfg.figures_dir)
		figures = [
			plots.plot_yearly_pass_share(result.yearly, outdir),
			plots.plot_mean_gross_by_rating(result.gross.mean_by_rating, result.movies['level'], outdir),
			plots.plot_gross_density(result.gross.gross_by_outcome, outdir),
			plots.plot_genre_outcomes(filter_display_genres(result.genre_counts, cfg.display_genres), outdir),
		]
		for outcome, report in result.vocabulary.items():
			if not report.nouns.empty:
				figures.append(plots.plot_top_terms(
					top_terms(report.nouns, cfg.top_k), outdir,
					f"top_nouns_{outcome.lower()}.png", f"Most frequent nouns ({outcome})",
				))
			if not report.phrases.empty:
				figures.append(plots.plot_top_terms(
					top_terms(report.phrases, cfg.top_k), outdir,
					f"top_phrases_{outcome.lower()}.png", f"Most frequent phrases ({outcome})",
				))
		return figures

	def run(self, render: bool = True) -> AnalysisResult:
		"""Run the whole pipeline in script order."""
		cfg = self.config
		steps = 6 if render else 5

		logger.info(f"[1/{steps}] Preparing movie table...")
		movies = self.prepare()

		logger.info(f"[2/{steps}] Summarizing outcomes and gross...")
		yearly = yearly_outcomes(movies, cfg.year_column, cfg.binary_column)
		gross = self.gross_summary(movies)

		logger.info(f"[3/{steps}] Counting outcomes per genre...")
		result = AnalysisResult(movies=movies, yearly=yearly, gross=gross, genre_counts=self.genre_summary(movies))

		logger.info(f"[4/{steps}] Reconciling with second rating source...")
		result.reconciliation, result.near_misses = self.reconcile(movies)

		logger.info(f"[5/{steps}] Annotating plot summaries...")
		result.vocabulary = self.vocabulary(movies)

		if render:
			logger.info(f"[6/{steps}] Rendering charts...")
			result.figures = self.render(result)
		logger.info(f"[Pipeline] Analysis complete with {len(result.figures)} charts")
		return result
