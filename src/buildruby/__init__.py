# Copyright (C) 2025 Antonio Paolillo. All rights reserved.
# SPDX-License-Identifier: MIT
"""Build Ruby .deb packages from source inside throwaway Docker containers."""
