"""
Package marker for the generative-model layer.
Prompt templates, the Gemini REST client and the flows that combine them with NASA POWER data.
"""
