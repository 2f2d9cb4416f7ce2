"""
DDL template for a tenant namespace.

Each entry is a single statement (asyncpg prepares statements one at a
time). `{schema}` is the only placeholder and is filled exclusively with a
quoted ValidIdentifier by `render_namespace_ddl`.
"""

from cardapio.engine.promotions import PromotionType
from cardapio.tenancy.identifiers import ValidIdentifier, quote_identifier

NAMESPACE_DDL_VERSION = 1

PROMOTION_TYPES = tuple(t.value for t in PromotionType)

_PROMOTION_TYPES_SQL = ", ".join(f"'{t}'" for t in PROMOTION_TYPES)

NAMESPACE_DDL: tuple[str, ...] = (
    "CREATE SCHEMA {schema}",
    """
    CREATE FUNCTION {schema}.atualizar_data_atualizacao()
    RETURNS TRIGGER AS $$
    BEGIN
        NEW.data_atualizacao = NOW();
        RETURN NEW;
    END;
    $$ LANGUAGE plpgsql
    """,
    """
    CREATE TABLE {schema}.categorias (
        id SERIAL PRIMARY KEY,
        nome TEXT NOT NULL UNIQUE,
        descricao TEXT,
        ordem_exibicao INTEGER DEFAULT 0,
        ativo BOOLEAN DEFAULT TRUE,
        data_criacao TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP,
        data_atualizacao TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TRIGGER trg_categorias_data_atualizacao
    BEFORE UPDATE ON {schema}.categorias FOR EACH ROW
    EXECUTE FUNCTION {schema}.atualizar_data_atualizacao()
    """,
    """
    CREATE TABLE {schema}.produtos (
        id SERIAL PRIMARY KEY,
        categoria_id INTEGER NOT NULL REFERENCES {schema}.categorias(id) ON DELETE RESTRICT,
        nome TEXT NOT NULL,
        descricao TEXT,
        preco NUMERIC(10, 2) NOT NULL,
        url_foto TEXT,
        ativo BOOLEAN DEFAULT TRUE,
        ordem_exibicao INTEGER DEFAULT 0,
        data_criacao TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP,
        data_atualizacao TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP
    )
    """,
    "CREATE INDEX idx_produtos_categoria_id ON {schema}.produtos(categoria_id)",
    "CREATE INDEX idx_produtos_nome ON {schema}.produtos(nome)",
    """
    CREATE TRIGGER trg_produtos_data_atualizacao
    BEFORE UPDATE ON {schema}.produtos FOR EACH ROW
    EXECUTE FUNCTION {schema}.atualizar_data_atualizacao()
    """,
    f"""
    CREATE TABLE {{schema}}.promocoes (
        id SERIAL PRIMARY KEY,
        nome_promocao TEXT NOT NULL,
        descricao_promocao TEXT,
        tipo_promocao TEXT NOT NULL CHECK (tipo_promocao IN ({_PROMOTION_TYPES_SQL})),
        valor_desconto_percentual NUMERIC(5, 2) CHECK (
            valor_desconto_percentual IS NULL
            OR (valor_desconto_percentual > 0 AND valor_desconto_percentual <= 100)
        ),
        preco_promocional_combo NUMERIC(10, 2) CHECK (
            preco_promocional_combo IS NULL OR preco_promocional_combo > 0
        ),
        data_inicio TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT CURRENT_TIMESTAMP,
        data_fim TIMESTAMP WITH TIME ZONE,
        ativo BOOLEAN DEFAULT TRUE,
        data_criacao TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP,
        data_atualizacao TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TRIGGER trg_promocoes_data_atualizacao
    BEFORE UPDATE ON {schema}.promocoes FOR EACH ROW
    EXECUTE FUNCTION {schema}.atualizar_data_atualizacao()
    """,
    """
    CREATE TABLE {schema}.promocao_produtos (
        id SERIAL PRIMARY KEY,
        promocao_id INTEGER NOT NULL REFERENCES {schema}.promocoes(id) ON DELETE CASCADE,
        produto_id INTEGER NOT NULL REFERENCES {schema}.produtos(id) ON DELETE RESTRICT,
        quantidade_no_combo INTEGER DEFAULT 1 CHECK (quantidade_no_combo > 0),
        preco_promocional_produto_individual NUMERIC(10, 2) CHECK (
            preco_promocional_produto_individual IS NULL
            OR preco_promocional_produto_individual >= 0
        ),
        data_criacao TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP,
        UNIQUE (promocao_id, produto_id)
    )
    """,
    "COMMENT ON TABLE {schema}.categorias IS 'Categorias do cardapio do restaurante'",
    "COMMENT ON TABLE {schema}.produtos IS 'Produtos do cardapio, vinculados a uma categoria'",
    "COMMENT ON TABLE {schema}.promocoes IS 'Promocoes oferecidas pelo restaurante'",
    "COMMENT ON TABLE {schema}.promocao_produtos IS 'Associa produtos a promocoes'",
)

# Tables every provisioned namespace must contain
NAMESPACE_TABLES = ("categorias", "produtos", "promocoes", "promocao_produtos")


def render_namespace_ddl(namespace: ValidIdentifier) -> list[str]:
    """Fill the template for one namespace. Rejects anything but a ValidIdentifier."""
    schema = quote_identifier(namespace)
    return [statement.format(schema=schema).strip() for statement in NAMESPACE_DDL]
