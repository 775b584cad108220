"""One-class-per-file implementations behind ``prompt_enhancer.base.models``."""
