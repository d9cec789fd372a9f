#-------------------------------------------------------------------------------
# Copyright 2021 Thomas Cools
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#-------------------------------------------------------------------------------

"""AppImage Desk"""

from .version import VERSION_INFO
from .core.conf import config, configure

from .install.request import (
    CustomAction, DesktopFileBuilder, IconSpec, MimeSpec, RegistrationRequest,
    RegistrationResult, make_request, remove_added_files, CATEGORIES)
from .install.freedesktop import check_if_desktop_file_exists, create_desktop_file

PROGNAME = 'AppImage Desk'
DOC_HTML = 'https://github.com/thocoo/appimage-desk'

__release__ = str(VERSION_INFO)
__version__ = ".".join(map(str, VERSION_INFO.release[:3]))
