"""Åland lunch menus: cached, filterable restaurant data scraped from aland.com."""
