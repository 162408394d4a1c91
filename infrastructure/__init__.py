"""基础设施：外部服务适配（Best Buy Categories API）。"""
