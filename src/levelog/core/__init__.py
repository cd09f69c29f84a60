"""Logger core: severities, deduplication, caller attribution and dispatch."""
