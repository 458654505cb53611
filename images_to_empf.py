#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Place PNG, JPEG, and WEBP images on a UV printer bed and write an .empf project.
"""

# local repo modules
import empf_generator.cli


if __name__ == "__main__":
	empf_generator.cli.main()
