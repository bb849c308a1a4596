from flatdedup.core.models import HashAlgorithmName, SortOrder

KEEP_ALIASES = {
    "name": SortOrder.NAME,
    "name-desc": SortOrder.NAME_DESC,
    "oldest": SortOrder.OLDEST,
    "newest": SortOrder.NEWEST,
}

KEEP_CHOICES = list(KEEP_ALIASES.keys())

KEEP_HELP_TEXT = (
    "Which file of each duplicate group survives:\n"
    "  name       : first file name in lexicographic order (default)\n"
    "  name-desc  : last file name in lexicographic order\n"
    "  oldest     : oldest modification time, ties broken by name\n"
    "  newest     : newest modification time, ties broken by name\n"
)

ALGORITHM_ALIASES = {
    "xxh128": HashAlgorithmName.XXH128,
    "xxhash": HashAlgorithmName.XXH128,
    "blake2b": HashAlgorithmName.BLAKE2B,
}

ALGORITHM_CHOICES = list(ALGORITHM_ALIASES.keys())

ALGORITHM_HELP_TEXT = (
    "Fingerprint algorithm (128-bit digest of the full file):\n"
    "  xxh128   : xxHash3-128, fastest (default)\n"
    "  blake2b  : BLAKE2b-128, cryptographic\n"
)

EPILOG_TEXT = """
Examples:
  Remove duplicates in the current directory using all CPUs
  %(prog)s

  Remove duplicates in ~/Downloads with 8 workers
  %(prog)s -i ~/Downloads --cores 8

  Show which files would be kept and deleted, change nothing
  %(prog)s -i ~/Downloads --dry-run

  Move duplicates to the system trash instead of deleting them
  %(prog)s -i ~/Downloads --trash
"""
