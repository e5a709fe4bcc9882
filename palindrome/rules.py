"""
Fixed validation rules and user-facing messages.

This file exists to keep the user-visible text in one place.
"""

MIN_LENGTH = 2  # raw length, before normalization

EMPTY_MESSAGE = "Введений рядок не може бути порожнім або складатися лише з пробілів."
TOO_SHORT_MESSAGE = "Рядок повинен містити щонайменше два символи."

PALINDROME_MESSAGE = "Це паліндром!"
NOT_PALINDROME_MESSAGE = "Це не паліндром!"

MIN_LEGACY_UPLOAD_BYTES = 8  # below this, non-UTF-8 uploads are not guessed at
