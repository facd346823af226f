"""Decision rules for iterative equity research: tickers, source ranking, scoring, portfolios, related tickers and refresh scheduling."""

__version__ = "0.1.0"