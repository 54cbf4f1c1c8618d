"""Workflow orchestrators composing the pipeline steps."""
