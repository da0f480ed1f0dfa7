# Copyright Red Hat
#
# dirdiff/__main__.py - Directory differ module entry point
#
# This file is part of the dirdiff project.
#
# SPDX-License-Identifier: Apache-2.0
from dirdiff.command import run

if __name__ == "__main__":
    run()
