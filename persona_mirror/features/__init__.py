from .extractor import compute_raw_features, extract_user_features
from .utils import round_half_up, safe_divide
