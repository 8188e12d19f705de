"""Page rendering for the portfolio site."""
