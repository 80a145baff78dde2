# InTune: harmonic and tempo compatibility engine for track discovery
# Package: intune

__version__ = "1.0.0-dev"
__author__ = "InTune Contributors"
__description__ = "Key/BPM compatibility scoring and ranking for DJ-style track discovery"

# Module structure:
#   - intune.analyze    : Key and BPM parsing and pairwise classification
#   - intune.generate   : Overall scoring, candidate ranking, key suggestions
#   - intune.config     : Configuration management
