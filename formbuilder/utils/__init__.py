"""Engines that operate on the field schema: validation, visibility, codec, editing."""
