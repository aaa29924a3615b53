"""Directory summarization: entry collection and summary building"""
