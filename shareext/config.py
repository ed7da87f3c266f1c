PLUGIN_ID = "cordova-plugin-share-extension"


class Config:
    def __init__(
        self,
        target_name: str = "ShareExt",
        product_folder: str = "ShareExtension",
        group_name: str = "ShareExtension",
        parent_group_name: str = "CustomTemplate",
        entitlements_path: str = "ShareExtension/ShareExtension.entitlements",
        distribution_identity: str = "iPhone Distribution",
        plugin_id: str = PLUGIN_ID,
        platform_folder: str = "platforms/ios",
        **kwargs
    ):
        self.target_name = target_name
        self.product_folder = product_folder
        self.group_name = group_name
        self.parent_group_name = parent_group_name
        self.entitlements_path = entitlements_path
        self.distribution_identity = distribution_identity
        self.plugin_id = plugin_id
        self.platform_folder = platform_folder
        self.__dict__.update(kwargs)
