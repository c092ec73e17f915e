from typing import Any, Callable, MutableMapping

from jinja2 import Environment, PackageLoader, PrefixLoader, BaseLoader, ChoiceLoader, Template, StrictUndefined


class TemplateLoader(BaseLoader):
    def __init__(self, package_name: str, default_lang: str = 'en'):
        en_loader = PackageLoader(package_name, package_path="templates/en")
        self.default_lang = default_lang
        self.loader_map: dict[str, list[BaseLoader]] = {
            'en': [en_loader],
        }
        self._loader = self._build_jinja_loader(self.loader_map)

    @staticmethod
    def _build_jinja_loader(loader_map: dict[str, list[BaseLoader]]):
        choice_loaders = dict((key, ChoiceLoader(loaders)) for (key, loaders) in loader_map.items())
        return PrefixLoader(choice_loaders)

    def get_source(self, environment: "Environment", template: str) -> tuple[str, str | None, Callable[[], bool] | None]:
        return self._loader.get_source(environment, template)

    def load(self, environment: Environment, name: str, globals: MutableMapping[str, Any] | None = None) -> Template:
        return self._loader.load(environment, name, globals)


class TemplateEnvironment(Environment):
    def __init__(self, package_name: str, default_lang: str | None = None):
        self.loader = TemplateLoader(package_name, default_lang or 'en')
        super().__init__(
            loader=self.loader,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False,
        )

    def load_template(self, name: str, lang: str | None = None, globals: MutableMapping[str, Any] | None = None):
        default_lang = self.loader.default_lang
        lang_options = set(self.loader.loader_map.keys())

        # Build candidate languages list by priority
        candidate_langs: list[str] = []
        if lang:
            candidate_langs.append(lang)
        if default_lang not in candidate_langs:
            candidate_langs.append(default_lang)
        if 'en' not in candidate_langs:
            candidate_langs.append('en')
        for l in sorted(lang_options):
            if l not in candidate_langs:
                candidate_langs.append(l)

        template_names = [f"{l}/{name}" for l in candidate_langs]
        return self.select_template(names=template_names, globals=globals)
