"""Åland lunch page scraping.

Pipeline::

    PageRenderer (Playwright)  →  HeuristicExtractor (BeautifulSoup)
        →  decode_restaurants (pydantic)  →  list[Restaurant]

``scraper.pipeline.LunchScraper`` runs the whole chain under one timeout.
"""
