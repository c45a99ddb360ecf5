"""Progression rules: levels, leagues, stat curve, crates and minting."""
