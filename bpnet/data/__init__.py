from .domain import (
    Domain, Pattern, denormalize_class_index, generate_random_pattern,
    normalize_class_index, random_vector)
