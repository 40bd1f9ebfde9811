"""Operator command-line tools for TalentFlow assessments."""
