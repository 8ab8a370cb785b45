"""
Run the full Bechdel analysis.

This script:
1) Loads and cleans data/movies.csv, encodes ratings and outcomes
2) Summarizes yearly pass rates, gross by rating and the top movies by gross
3) Counts outcomes per genre
4) Reconciles ratings against data/bechdeltest.csv
5) Compares plot-summary vocabulary between passing and failing movies
6) Saves charts to outputs/figures/

Usage:
    python -m scripts.run_analysis

Set BECHDEL_CONFIG to a JSON file to override paths and thresholds.
"""

import os  # config path from the environment
import time  # measure total runtime

from loguru import logger  # console logging

from bechdel.config import load_config  # validated settings
from bechdel.models import PASS  # outcome label for summaries
from bechdel.pipeline import BechdelAnalysis  # analysis stages


def main():
	# Headline banner for visibility in console
	logger.info("=" * 60)
	logger.info("Bechdel Test Analysis")
	logger.info("=" * 60)

	config = load_config(os.environ.get('BECHDEL_CONFIG'))  # defaults when unset
	t0 = time.time()  # start timer
	result = BechdelAnalysis(config).run()
	logger.info(f"[OK] Pipeline finished in {time.time() - t0:.2f}s")

	# Summary of every stage
	yearly = result.yearly
	logger.info(f"  {len(result.movies)} complete movies")
	logger.info(f"  overall pass share: {yearly[PASS].sum() / max(1, yearly['total'].sum()):.3f}")
	for rating, mean in result.gross.mean_by_rating.items():
		logger.info(f"  rating {rating}: mean international gross {mean:,.0f}")
	top = result.gross.top
	logger.info(f"  top {len(top)} by gross: {(top[config.binary_column] == PASS).sum()} pass")
	logger.info(f"  {result.genre_counts['genre'].nunique()} genres")

	if result.reconciliation is not None:
		tally = result.reconciliation
		logger.info(
			f"  {tally.total} matched | equal={tally.equal} "
			f"second higher={tally.second_greater} first higher={tally.first_greater}"
		)
		logger.info(f"  {len(result.near_misses)} near-miss titles excluded by exact matching")

	for outcome, report in result.vocabulary.items():
		logger.info(f"  {outcome} top nouns: {report.nouns['key'].head(10).tolist()}")
		logger.info(f"  {outcome} top keywords: {report.keywords['keyword'].head(10).tolist()}")

	logger.info(f"  saved {len(result.figures)} charts to {config.figures_dir}")
	logger.info("=" * 60)


if __name__ == '__main__':
	main()  # run analysis
