"""
Command-line interface entry points for langlinks.

Entry points:
- llextract: Extract dictionaries from a Wikidata triple dump
- llselect: Select SPOTLX facts from a fact file
- llstats: Summarize an extraction output directory
"""
