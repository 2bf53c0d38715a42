"""
Example insertion configuration file for the MakeInsertions CLI.

Usage:
    make-insertions insert logo.png template.png out.png \
        --config examples/insertion_config.py -w 200x150+50+60/15
"""

insertion_config = {
    # merge "100x100+0+0" and "100x100+0+0/0" instead of failing
    'duplicate_policy': 'coalesce',
    # fail on "100x100+0+0/abc" instead of treating it as 0 degrees
    'strict_rotation': True,
    # colour made transparent in the insert
    'background_color': (255, 255, 255),
    # True keys the insert's top-left pixel instead of background_color
    'sample_background': False,
    'key_tolerance': 8,
    'keep_aspect_ratio': True,
    'smooth_transform': True,
}
