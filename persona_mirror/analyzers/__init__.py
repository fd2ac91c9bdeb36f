from .profile_analyzer import analyze_user_profile, compute_user_stats
from .group_analyzer import analyze_group_persona, compute_group_stats
