from shareext.config import Config, PLUGIN_ID
from shareext.details.context import BuildContext, ConfigurationMissing
from shareext.hook import HookResult, add_share_extension_target, run_hook
