"""Flyer extraction response pipeline.

Parses vision-model output, corrects common model errors, validates the
classification-dependent required fields, and shapes the result into an
ExtractionSuccess or ExtractionFailure.
"""
